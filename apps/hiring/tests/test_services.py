"""
Unit tests for the hiring workflow.
Covers charging, duplicate protection, ending and cancelling hires.
"""
from decimal import Decimal
from unittest import mock
from uuid import uuid4
from django.db import IntegrityError
from django.test import TestCase
from django.contrib.auth import get_user_model

from apps.core.exceptions import ConflictError, InsufficientFundsError, NotFoundError
from apps.catalog.models import Worker
from apps.hiring.models import Hire, HireStatus
from apps.hiring import services
from apps.ledger import services as ledger_services
from apps.ledger.models import BalanceEntry, BalanceEntryType


User = get_user_model()


class HiringTestMixin:
    def setUp(self):
        self.user = User.objects.create_user(
            username='alice', email='alice@example.com', password='secret1'
        )
        self.worker = Worker.objects.create(
            name='Sarah Chen',
            category='Design',
            description='UI/UX designer with 8 years of experience in web and mobile design.',
            hourly_rate=Decimal('65.00'),
            rating=Decimal('4.9'),
            location='San Francisco, CA',
        )

    def balance(self):
        return ledger_services.get_balance(self.user.id)


class HireWorkerTest(HiringTestMixin, TestCase):
    def test_hire_scenario(self):
        """Deposit 50, fail to hire at 65, top up 20, hire, end with 5 left."""
        ledger_services.add_funds(self.user.id, '50')

        with self.assertRaises(InsufficientFundsError) as ctx:
            services.hire_worker(self.user.id, self.worker.id)
        self.assertEqual(ctx.exception.required, Decimal('65.00'))
        self.assertEqual(ctx.exception.available, Decimal('50.00'))
        self.assertEqual(self.balance(), Decimal('50.00'))
        self.assertFalse(Hire.objects.exists())

        ledger_services.add_funds(self.user.id, '20')
        result = services.hire_worker(self.user.id, self.worker.id)

        self.assertEqual(result.message, "Successfully hired Sarah Chen! $65.00 deducted.")
        self.assertEqual(result.balance, Decimal('5.00'))
        self.assertEqual(self.balance(), Decimal('5.00'))

        hire = Hire.objects.get(id=result.hire_id)
        self.assertEqual(hire.status, HireStatus.ACTIVE)
        self.assertEqual(hire.amount, Decimal('65.00'))

        charge = BalanceEntry.objects.get(entry_type=BalanceEntryType.HIRE_CHARGE)
        self.assertEqual(charge.hire_id, hire.id)
        self.assertEqual(charge.balance_after, Decimal('5.00'))

    def test_duplicate_active_hire_rejected(self):
        ledger_services.add_funds(self.user.id, '200')
        services.hire_worker(self.user.id, self.worker.id)

        with self.assertRaises(ConflictError) as ctx:
            services.hire_worker(self.user.id, self.worker.id)

        self.assertEqual(ctx.exception.message, "You have already hired this worker.")
        self.assertEqual(self.balance(), Decimal('135.00'))
        self.assertEqual(Hire.objects.count(), 1)

    def test_rehire_after_ending(self):
        ledger_services.add_funds(self.user.id, '200')
        first = services.hire_worker(self.user.id, self.worker.id)
        services.end_hire(self.user.id, first.hire_id)

        second = services.hire_worker(self.user.id, self.worker.id)
        self.assertNotEqual(first.hire_id, second.hire_id)
        self.assertEqual(self.balance(), Decimal('70.00'))

    def test_unknown_worker(self):
        ledger_services.add_funds(self.user.id, '200')
        with self.assertRaises(NotFoundError) as ctx:
            services.hire_worker(self.user.id, uuid4())
        self.assertEqual(ctx.exception.message, "Worker not found.")

    def test_duplicate_caught_by_constraint_rolls_back_charge(self):
        ledger_services.add_funds(self.user.id, '200')
        services.hire_worker(self.user.id, self.worker.id)

        # Simulate a concurrent request that passed the duplicate check.
        with mock.patch('django.db.models.query.QuerySet.exists', return_value=False):
            with self.assertRaises(ConflictError) as ctx:
                services.hire_worker(self.user.id, self.worker.id)

        self.assertEqual(ctx.exception.message, "You have already hired this worker.")
        self.assertEqual(self.balance(), Decimal('135.00'))
        self.assertEqual(Hire.objects.count(), 1)
        self.assertEqual(BalanceEntry.objects.filter(user=self.user).count(), 2)

    def test_unrelated_integrity_error_is_not_reported_as_duplicate(self):
        ledger_services.add_funds(self.user.id, '200')

        with mock.patch.object(Hire.objects, 'create', side_effect=IntegrityError('fk violation')):
            with self.assertRaises(IntegrityError):
                services.hire_worker(self.user.id, self.worker.id)

        self.assertEqual(self.balance(), Decimal('200.00'))
        self.assertFalse(Hire.objects.exists())

    def test_worker_removed_during_hire(self):
        ledger_services.add_funds(self.user.id, '200')

        with mock.patch.object(Hire.objects, 'create', side_effect=IntegrityError('fk violation')), \
                mock.patch('apps.catalog.services.worker_exists', return_value=False):
            with self.assertRaises(NotFoundError) as ctx:
                services.hire_worker(self.user.id, self.worker.id)

        self.assertEqual(ctx.exception.message, "Worker not found.")
        self.assertEqual(self.balance(), Decimal('200.00'))
        self.assertEqual(self.balance(), Decimal('200.00'))

    def test_amount_is_snapshot(self):
        """Changing a worker's rate later does not change existing hires."""
        ledger_services.add_funds(self.user.id, '100')
        result = services.hire_worker(self.user.id, self.worker.id)

        Worker.objects.filter(id=self.worker.id).update(hourly_rate=Decimal('99.00'))

        hire = services.list_hires(self.user.id)[0]
        self.assertEqual(hire.id, result.hire_id)
        self.assertEqual(hire.amount, Decimal('65.00'))
        self.assertEqual(hire.hourly_rate, Decimal('99.00'))


class EndHireTest(HiringTestMixin, TestCase):
    def setUp(self):
        super().setUp()
        ledger_services.add_funds(self.user.id, '100')
        self.hire_id = services.hire_worker(self.user.id, self.worker.id).hire_id

    def test_end_hire(self):
        result = services.end_hire(self.user.id, self.hire_id)
        self.assertEqual(result.message, "Hire ended successfully.")
        self.assertEqual(result.status, HireStatus.COMPLETED)

        hire = Hire.objects.get(id=self.hire_id)
        self.assertEqual(hire.status, HireStatus.COMPLETED)
        self.assertIsNotNone(hire.ended_at)

    def test_end_hire_twice_is_noop(self):
        services.end_hire(self.user.id, self.hire_id)
        ended_at = Hire.objects.get(id=self.hire_id).ended_at

        result = services.end_hire(self.user.id, self.hire_id)
        self.assertEqual(result.status, HireStatus.COMPLETED)
        self.assertEqual(Hire.objects.get(id=self.hire_id).ended_at, ended_at)

    def test_end_hire_of_other_user(self):
        other = User.objects.create_user(username='bob', email='bob@example.com', password='secret1')
        with self.assertRaises(NotFoundError):
            services.end_hire(other.id, self.hire_id)
        self.assertEqual(Hire.objects.get(id=self.hire_id).status, HireStatus.ACTIVE)


class CancelHireTest(HiringTestMixin, TestCase):
    def setUp(self):
        super().setUp()
        ledger_services.add_funds(self.user.id, '100')
        self.hire_id = services.hire_worker(self.user.id, self.worker.id).hire_id

    def test_cancel_refunds_snapshot_amount(self):
        Worker.objects.filter(id=self.worker.id).update(hourly_rate=Decimal('10.00'))

        result = services.cancel_hire(self.user.id, self.hire_id)

        self.assertEqual(result.status, HireStatus.CANCELLED)
        self.assertEqual(result.balance, Decimal('100.00'))
        self.assertEqual(self.balance(), Decimal('100.00'))
        refund = BalanceEntry.objects.get(entry_type=BalanceEntryType.REFUND)
        self.assertEqual(refund.amount, Decimal('65.00'))

    def test_cancel_twice_refunds_once(self):
        services.cancel_hire(self.user.id, self.hire_id)
        result = services.cancel_hire(self.user.id, self.hire_id)

        self.assertEqual(result.status, HireStatus.CANCELLED)
        self.assertEqual(self.balance(), Decimal('100.00'))
        self.assertEqual(BalanceEntry.objects.filter(entry_type=BalanceEntryType.REFUND).count(), 1)

    def test_cancel_completed_hire_rejected(self):
        services.end_hire(self.user.id, self.hire_id)
        with self.assertRaises(ConflictError):
            services.cancel_hire(self.user.id, self.hire_id)
        self.assertEqual(self.balance(), Decimal('35.00'))


class ListHiresTest(HiringTestMixin, TestCase):
    def test_list_hires_joins_worker_fields(self):
        ledger_services.add_funds(self.user.id, '100')
        services.hire_worker(self.user.id, self.worker.id)

        hires = services.list_hires(self.user.id)
        self.assertEqual(len(hires), 1)
        self.assertEqual(hires[0].name, 'Sarah Chen')
        self.assertEqual(hires[0].category, 'Design')
        self.assertEqual(hires[0].location, 'San Francisco, CA')
        self.assertEqual(hires[0].rating, Decimal('4.9'))

    def test_list_hires_only_own(self):
        other = User.objects.create_user(username='bob', email='bob@example.com', password='secret1')
        ledger_services.add_funds(other.id, '100')
        services.hire_worker(other.id, self.worker.id)

        self.assertEqual(services.list_hires(self.user.id), [])
