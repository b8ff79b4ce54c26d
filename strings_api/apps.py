from django.apps import AppConfig


class StringsApiConfig(AppConfig):
    name = 'strings_api'
    verbose_name = 'String Analyser'

    def ready(self):
        from .services import StringAnalysisService

        # One in-memory store per process, owned by the app config.
        self.service = StringAnalysisService()


def get_service():
    from django.apps import apps

    return apps.get_app_config('strings_api').service
