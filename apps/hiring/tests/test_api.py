"""
Integration tests for hire API endpoints.
"""
import json
from decimal import Decimal
from django.test import TestCase, Client
from django.contrib.auth import get_user_model

from apps.catalog.models import Worker
from apps.identity.jwt_auth import create_access_token
from apps.ledger import services as ledger_services


User = get_user_model()


class HireAPITest(TestCase):
    def setUp(self):
        self.client = Client()
        self.user = User.objects.create_user(
            username='alice', email='alice@example.com', password='secret1'
        )
        self.auth = {'HTTP_AUTHORIZATION': f'Bearer {create_access_token(self.user)}'}
        self.worker = Worker.objects.create(
            name='Robert Taylor',
            category='Construction',
            description='Plumbing contractor with full licensing.',
            hourly_rate=Decimal('70.00'),
            rating=Decimal('4.7'),
            location='Denver, CO',
        )

    def hire(self, worker_id):
        return self.client.post(
            '/api/hires',
            json.dumps({'worker_id': str(worker_id)}),
            content_type='application/json',
            **self.auth,
        )

    def test_hire_requires_auth(self):
        response = self.client.post(
            '/api/hires',
            json.dumps({'worker_id': str(self.worker.id)}),
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 401)

    def test_hire_insufficient_funds(self):
        response = self.hire(self.worker.id)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json()['error'],
            "Insufficient funds. You need $70.00 but have $0.00. Please add funds first.",
        )

    def test_hire_unknown_worker(self):
        response = self.hire('00000000-0000-0000-0000-000000000000')
        self.assertEqual(response.status_code, 404)

    def test_hire_list_and_end(self):
        ledger_services.add_funds(self.user.id, '100')

        response = self.hire(self.worker.id)
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(Decimal(data['balance']), Decimal('30.00'))
        hire_id = data['hire_id']

        response = self.hire(self.worker.id)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['error'], "You have already hired this worker.")

        response = self.client.get('/api/hires', **self.auth)
        hires = response.json()
        self.assertEqual(len(hires), 1)
        self.assertEqual(hires[0]['name'], 'Robert Taylor')
        self.assertEqual(hires[0]['status'], 'active')

        response = self.client.patch(f'/api/hires/{hire_id}/end', **self.auth)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['status'], 'completed')

    def test_cancel_hire(self):
        ledger_services.add_funds(self.user.id, '100')
        hire_id = self.hire(self.worker.id).json()['hire_id']

        response = self.client.patch(f'/api/hires/{hire_id}/cancel', **self.auth)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['status'], 'cancelled')
        self.assertEqual(Decimal(response.json()['balance']), Decimal('100.00'))

    def test_end_hire_of_other_user_is_not_found(self):
        ledger_services.add_funds(self.user.id, '100')
        hire_id = self.hire(self.worker.id).json()['hire_id']

        other = User.objects.create_user(username='bob', email='bob@example.com', password='secret1')
        other_auth = {'HTTP_AUTHORIZATION': f'Bearer {create_access_token(other)}'}

        response = self.client.patch(f'/api/hires/{hire_id}/end', **other_auth)
        self.assertEqual(response.status_code, 404)
