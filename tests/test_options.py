import logging

import pytest
from pydantic import ValidationError

from generative_ai_client import RequestOptions, get_logger, setup_logging
from generative_ai_client.core import DEFAULT_API_VERSION, DEFAULT_ENDPOINT, DEFAULT_TIMEOUT


def test_defaults():
    options = RequestOptions()

    assert options.timeout is None
    assert options.effective_timeout == DEFAULT_TIMEOUT
    assert options.api_version == DEFAULT_API_VERSION == "v1beta"
    assert options.endpoint == DEFAULT_ENDPOINT


def test_explicit_timeout():
    assert RequestOptions(timeout=2.5).effective_timeout == 2.5


@pytest.mark.parametrize("timeout", [0, -1.0])
def test_non_positive_timeout_is_rejected(timeout):
    with pytest.raises(ValidationError):
        RequestOptions(timeout=timeout)


@pytest.mark.parametrize("kwargs", [{"api_version": "/"}, {"endpoint": "generativelanguage.googleapis.com"}])
def test_invalid_values_are_rejected(kwargs):
    with pytest.raises(ValidationError):
        RequestOptions(**kwargs)


def test_options_are_immutable():
    options = RequestOptions()

    with pytest.raises(ValidationError):
        options.timeout = 10


def test_get_logger_stays_in_library_namespace():
    assert get_logger().name == "generative_ai_client"
    assert get_logger("generative_ai_client.controller").name == "generative_ai_client.controller"
    assert get_logger("app").name == "generative_ai_client.app"


def test_setup_logging_is_idempotent():
    library_logger = logging.getLogger("generative_ai_client")
    before = list(library_logger.handlers)
    try:
        setup_logging(logging.DEBUG)
        setup_logging(logging.DEBUG)

        added = [h for h in library_logger.handlers if h not in before]
        assert len(added) == 1
        assert library_logger.level == logging.DEBUG
    finally:
        library_logger.handlers = before
        library_logger.setLevel(logging.NOTSET)
