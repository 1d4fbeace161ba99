from relcrawl.services.http_service import HttpService
from relcrawl.exceptions import HttpFetchError
from unittest.mock import Mock
import pytest
import requests


def test_get_json_success():
    mock_http_client = Mock()
    mock_http_client.return_value.status_code = 200
    mock_http_client.return_value.json.return_value = {"error": False, "body": {"users": []}}
    http = HttpService(user_agent='TestAgent', http_client=mock_http_client)
    data = http.get_json('http://example.com/ajax', params={"offset": 0})
    assert data == {"error": False, "body": {"users": []}}
    _, kwargs = mock_http_client.call_args
    assert kwargs["params"] == {"offset": 0}
    assert kwargs["headers"]["User-Agent"] == "TestAgent"
    assert kwargs["timeout"] == 10


def test_cookie_header_only_when_configured():
    mock_http_client = Mock()
    mock_http_client.return_value.status_code = 200
    mock_http_client.return_value.json.return_value = {}

    HttpService(user_agent='A', http_client=mock_http_client).get_json('http://example.com')
    assert "Cookie" not in mock_http_client.call_args[1]["headers"]

    HttpService(user_agent='A', http_client=mock_http_client, cookie="PHPSESSID=x").get_json('http://example.com')
    assert mock_http_client.call_args[1]["headers"]["Cookie"] == "PHPSESSID=x"


def test_get_json_wraps_requests_exception():
    mock_http_client = Mock()
    mock_http_client.side_effect = requests.exceptions.Timeout("timed out")
    http = HttpService(user_agent='TestAgent', http_client=mock_http_client)

    with pytest.raises(HttpFetchError) as e:
        http.get_json('http://example.com')
    assert "http://example.com" in str(e.value)


def test_non_success_status_raises():
    mock_http_client = Mock()
    mock_http_client.return_value.status_code = 429
    http = HttpService(user_agent='TestAgent', http_client=mock_http_client)

    with pytest.raises(HttpFetchError) as e:
        http.get_json('http://example.com')
    assert "429" in str(e.value)


def test_invalid_json_raises():
    mock_http_client = Mock()
    mock_http_client.return_value.status_code = 200
    mock_http_client.return_value.json.side_effect = ValueError("Expecting value")
    http = HttpService(user_agent='TestAgent', http_client=mock_http_client)

    with pytest.raises(HttpFetchError):
        http.get_json('http://example.com')


def test_unexpected_exceptions_bubble_up():
    """Non-requests exceptions from the client are NOT swallowed."""
    mock_http_client = Mock()
    mock_http_client.side_effect = RuntimeError("Real bug in client")
    http = HttpService(user_agent='TestAgent', http_client=mock_http_client)

    with pytest.raises(RuntimeError):
        http.get_json('http://example.com')
