from django.dispatch import Signal

# Sent after a hire is created and paid for. Args: hire, worker, balance
worker_hired = Signal()
