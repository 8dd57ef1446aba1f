#slot_manager\client\llama_client.py

import requests

from slot_manager.core.errors import SlotClientError


class LlamaCppClient:
    def __init__(self, base_url: str, timeout: float = 10.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def complete(self, params: dict, id_slot: int | None = None):
        """POST /completion, pinning the request to ``id_slot`` when given."""
        payload = dict(params)
        if id_slot is not None:
            payload["id_slot"] = id_slot

        url = f"{self.base_url}/completion"
        try:
            response = requests.post(url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise SlotClientError(f"llama.cpp completion request failed: {e}") from e

        if response.status_code != 200:
            raise SlotClientError(
                f"llama.cpp completion failed [{response.status_code}]: {response.text}"
            )

        return response.json()

    def health(self) -> bool:
        url = f"{self.base_url}/health"
        try:
            response = requests.get(url, timeout=self.timeout)
        except requests.RequestException:
            return False
        return response.status_code == 200
