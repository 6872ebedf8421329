from dataclasses import dataclass, replace
from pathlib import Path


@dataclass(frozen=True)
class SelectedFile:
    name: str
    content_type: str
    data: bytes


@dataclass(frozen=True)
class StudioState:
    """Interaction state of the studio; every change goes through a transition."""

    file: SelectedFile | None = None
    preview_url: str | None = None
    transformed_url: str | None = None
    style: str = "ghibli"
    loading: bool = False
    modal_open: bool = False
    modal_image: str | None = None

    @property
    def can_transform(self) -> bool:
        return self.file is not None and not self.loading

    @property
    def showing_result(self) -> bool:
        return self.preview_url is not None and self.transformed_url is not None


def select_file(state: StudioState, file: SelectedFile, preview_url: str | None = None) -> StudioState:
    preview = preview_url or Path(file.name).resolve().as_uri()
    return replace(state, file=file, preview_url=preview, transformed_url=None)


def select_style(state: StudioState, style: str) -> StudioState:
    return replace(state, style=style)


def begin_transform(state: StudioState) -> StudioState:
    if not state.can_transform:
        raise RuntimeError("Cannot transform without a selected file or while a call is in flight")
    return replace(state, loading=True, transformed_url=None)


def transform_succeeded(state: StudioState, url: str) -> StudioState:
    return replace(state, loading=False, transformed_url=url)


def transform_failed(state: StudioState) -> StudioState:
    return replace(state, loading=False, transformed_url=None)


def open_modal(state: StudioState, image: str) -> StudioState:
    return replace(state, modal_open=True, modal_image=image)


def close_modal(state: StudioState) -> StudioState:
    return replace(state, modal_open=False)
