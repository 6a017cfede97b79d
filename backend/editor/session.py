from typing import Optional

import httpx

from editor.canvas import DoodleCanvas

class EditorSession:
    """Submits edit commands for one canvas, one request at a time."""

    def __init__(
        self,
        canvas: DoodleCanvas,
        base_url: str = "http://127.0.0.1:8000",
        endpoint: str = "/edit",
        http_client: Optional[httpx.AsyncClient] = None
    ):
        self.canvas = canvas
        self.base_url = base_url
        self.endpoint = endpoint
        self.command = ""
        self.is_loading = False
        self.last_response_text: Optional[str] = None
        self._http_client = http_client

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Get or create a reusable HTTP client"""
        if self._http_client is None or self._http_client.is_closed:
            self._http_client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(120.0, connect=10.0)
            )
        return self._http_client

    async def close(self):
        if self._http_client is not None and not self._http_client.is_closed:
            await self._http_client.aclose()

    async def submit(self, command: Optional[str] = None) -> bool:
        """
        Send the canvas and command to the proxy and repaint from the reply.

        Returns True when the canvas was replaced. Blank commands and submits
        made while a request is pending are ignored. The command is cleared
        whatever the outcome.
        """
        if command is not None:
            self.command = command

        if not self.command.strip() or self.is_loading:
            return False

        self.is_loading = True
        self.last_response_text = None
        try:
            client = await self._get_http_client()
            response = await client.post(self.endpoint, json={
                "image": self.canvas.to_data_url(),
                "command": self.command
            })

            if response.status_code != 200:
                print(f"❌ API request failed: {response.status_code}")
                return False

            data = response.json()
            self.last_response_text = data.get("responseText")

            if data.get("editedImage"):
                self.canvas.load_data_url(data["editedImage"])
                return True
            return False

        except (httpx.HTTPError, ValueError, OSError) as e:
            print(f"❌ Error processing AI command: {e}")
            return False

        finally:
            self.is_loading = False
            self.command = ""
