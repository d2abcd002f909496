"""Settings modules layer on base without losing the API contract."""
from config.settings import development


def test_development_keeps_api_error_handler():
    api = development.REST_FRAMEWORK
    assert api["EXCEPTION_HANDLER"] == "apps.api.exceptions.marketplace_exception_handler"
    assert "rest_framework.renderers.BrowsableAPIRenderer" in api["DEFAULT_RENDERER_CLASSES"]


def test_development_logs_matching_verbosely():
    assert development.LOGGING["loggers"]["apps.matching"]["level"] == "DEBUG"
