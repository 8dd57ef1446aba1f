"""Test llama.cpp client."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from slot_manager.client.llama_client import LlamaCppClient
from slot_manager.core.errors import SlotClientError


def _response(status_code=200, payload=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload or {}
    response.text = text
    return response


class TestLlamaCppClient:
    """Test completion requests."""

    def test_complete_sends_id_slot(self):
        client = LlamaCppClient("http://llama:8080/", timeout=3)

        with patch("slot_manager.client.llama_client.requests.post") as post:
            post.return_value = _response(payload={"content": "Hi"})
            result = client.complete({"prompt": "Hello"}, id_slot=1)

        assert result == {"content": "Hi"}
        post.assert_called_once_with(
            "http://llama:8080/completion",
            json={"prompt": "Hello", "id_slot": 1},
            timeout=3,
        )

    def test_complete_does_not_mutate_params(self):
        client = LlamaCppClient("http://llama:8080")
        params = {"prompt": "Hello"}

        with patch("slot_manager.client.llama_client.requests.post") as post:
            post.return_value = _response()
            client.complete(params, id_slot=0)

        assert params == {"prompt": "Hello"}

    def test_complete_without_slot(self):
        client = LlamaCppClient("http://llama:8080")

        with patch("slot_manager.client.llama_client.requests.post") as post:
            post.return_value = _response()
            client.complete({"prompt": "Hello"})

        assert "id_slot" not in post.call_args.kwargs["json"]

    def test_error_status(self):
        client = LlamaCppClient("http://llama:8080")

        with patch("slot_manager.client.llama_client.requests.post") as post:
            post.return_value = _response(status_code=503, text="Loading model")
            with pytest.raises(SlotClientError, match="503"):
                client.complete({"prompt": "Hello"})

    def test_connection_error(self):
        client = LlamaCppClient("http://llama:8080")

        with patch("slot_manager.client.llama_client.requests.post") as post:
            post.side_effect = requests.ConnectionError("refused")
            with pytest.raises(SlotClientError):
                client.complete({"prompt": "Hello"})

    def test_health(self):
        client = LlamaCppClient("http://llama:8080")

        with patch("slot_manager.client.llama_client.requests.get") as get:
            get.return_value = _response()
            assert client.health() is True

            get.side_effect = requests.ConnectionError("refused")
            assert client.health() is False
