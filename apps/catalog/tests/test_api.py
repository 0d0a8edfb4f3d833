"""
Integration tests for worker API endpoints.
"""
from decimal import Decimal
from django.test import TestCase, Client

from apps.catalog.models import Worker


class WorkerAPITest(TestCase):
    def setUp(self):
        self.client = Client()
        self.worker = Worker.objects.create(
            name='Emma Wilson',
            category='Technology',
            description='Full-stack developer.',
            hourly_rate=Decimal('95.00'),
            rating=Decimal('4.9'),
            skills=['React'],
        )
        Worker.objects.create(
            name='Lisa Brown',
            category='Cleaning',
            hourly_rate=Decimal('35.00'),
            rating=Decimal('4.8'),
        )

    def test_list_workers_is_public(self):
        response = self.client.get('/api/workers')
        self.assertEqual(response.status_code, 200)
        self.assertEqual([w['name'] for w in response.json()], ['Emma Wilson', 'Lisa Brown'])

    def test_list_workers_filters(self):
        response = self.client.get('/api/workers', {'category': 'Cleaning'})
        self.assertEqual([w['name'] for w in response.json()], ['Lisa Brown'])

        response = self.client.get('/api/workers', {'search': 'full-stack'})
        self.assertEqual([w['name'] for w in response.json()], ['Emma Wilson'])

    def test_categories(self):
        response = self.client.get('/api/workers/categories')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), ['Cleaning', 'Technology'])

    def test_get_worker(self):
        response = self.client.get(f'/api/workers/{self.worker.id}')
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data['skills'], ['React'])
        self.assertEqual(Decimal(data['hourly_rate']), Decimal('95'))

    def test_get_unknown_worker(self):
        response = self.client.get('/api/workers/00000000-0000-0000-0000-000000000000')
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()['error'], "Worker not found.")
