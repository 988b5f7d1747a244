from django.apps import AppConfig


class LazycalConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'lazycal'
    verbose_name = 'LazyCal'
