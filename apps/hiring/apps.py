from django.apps import AppConfig


class HiringConfig(AppConfig):
    name = 'apps.hiring'
    label = 'hiring'
