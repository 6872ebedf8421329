import logging
import mimetypes
import time
from pathlib import Path

import httpx

from app.ui import state as transitions
from app.ui.state import SelectedFile, StudioState

logger = logging.getLogger(__name__)


class StudioError(Exception):
    """Raised when the studio API answers with an error payload."""


def load_file(path: Path) -> SelectedFile:
    content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    return SelectedFile(name=str(path), content_type=content_type, data=path.read_bytes())


def _error_message(response: httpx.Response) -> str:
    try:
        return response.json().get("error") or response.reason_phrase
    except ValueError:
        return response.text or response.reason_phrase


class StudioClient:
    """Drives the studio API the way the browser page does."""

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: float = 120.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.http = httpx.Client(base_url=base_url, timeout=timeout, transport=transport)
        self.state = StudioState()

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> "StudioClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def list_styles(self) -> list[str]:
        response = self.http.get("/api/styles")
        response.raise_for_status()
        payload = response.json()
        self.state = transitions.select_style(self.state, payload["default"])
        return payload["styles"]

    def request_upload_url(self, file_name: str, file_type: str) -> str:
        response = self.http.post(
            "/api/upload-url",
            json={"fileName": file_name, "fileType": file_type},
        )
        if response.is_error:
            raise StudioError(_error_message(response))
        return response.json()["url"]

    def upload_direct(self, file: SelectedFile) -> str:
        """Upload straight to storage through a presigned URL; returns that URL."""
        name = Path(file.name).name
        url = self.request_upload_url(name, file.content_type)
        response = self.http.put(
            url,
            content=file.data,
            headers={"Content-Type": file.content_type},
        )
        response.raise_for_status()
        return url

    def select_file(self, file: SelectedFile) -> None:
        self.state = transitions.select_file(self.state, file)

    def select_style(self, style: str) -> None:
        self.state = transitions.select_style(self.state, style)

    def transform(self) -> str | None:
        """
        Submit the selected file and style. Returns the transformed image URL,
        or None when the call failed; the state is left without a result then.
        """
        self.state = transitions.begin_transform(self.state)
        file = self.state.file
        try:
            response = self.http.post(
                "/api/transform",
                files={"file": (Path(file.name).name, file.data, file.content_type)},
                data={"style": self.state.style},
            )
        except httpx.HTTPError:
            logger.exception("Transform request failed")
            self.state = transitions.transform_failed(self.state)
            return None

        if response.is_error:
            logger.error("Transform rejected (%s): %s", response.status_code, _error_message(response))
            self.state = transitions.transform_failed(self.state)
            return None

        url = response.json()["transformedImageUrl"]
        self.state = transitions.transform_succeeded(self.state, url)
        return url

    def download(self, destination: Path | None = None) -> Path:
        if not self.state.transformed_url:
            raise StudioError("Nothing to download yet")
        target = destination or Path(f"transformed-image-{int(time.time() * 1000)}.png")
        response = self.http.get(self.state.transformed_url)
        response.raise_for_status()
        target.write_bytes(response.content)
        return target
