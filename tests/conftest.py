from unittest.mock import Mock

import pytest
import requests


@pytest.fixture
def tmdb_response():
    """Успешный ответ requests.get с JSON-телом"""
    response = Mock()
    response.json.return_value = {"page": 1, "results": [{"id": 1}], "total_pages": 1, "total_results": 1}
    response.raise_for_status.return_value = None
    return response


@pytest.fixture
def http_error_response():
    """Ответ requests.get, у которого raise_for_status поднимает HTTPError со статусом 503"""
    response = Mock()
    response.status_code = 503
    response.raise_for_status.side_effect = requests.exceptions.HTTPError(response=response)
    return response


@pytest.fixture
def html_response():
    """Настоящий requests.Response со статусом 200 и HTML вместо JSON"""
    response = requests.models.Response()
    response.status_code = 200
    response._content = b"<html>Service Unavailable</html>"
    response.encoding = "utf-8"
    response.url = "https://api.themoviedb.org/3/movie/popular"
    return response
