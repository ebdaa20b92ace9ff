from django.apps import AppConfig, apps
from django.conf import settings


class CafeConfig(AppConfig):
    name = "cafe"
    verbose_name = "Singal Bucks"

    session = None

    def ready(self):
        from cafe.session import CafeSession

        # No AWS calls happen here; boto3 clients are created per request.
        self.session = CafeSession.from_settings(settings)


def get_session():
    return apps.get_app_config("cafe").session
