from django.dispatch import Signal

# Sent after a new account is committed. Args: user
user_registered = Signal()

# Sent after a successful email/password login. Args: user
user_logged_in_via_api = Signal()

# Sent after a reset token is issued. Args: user, token
password_reset_requested = Signal()
