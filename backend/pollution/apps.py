from django.apps import AppConfig


class PollutionConfig(AppConfig):
    name = "pollution"
    verbose_name = "Air pollution stations and readings"
