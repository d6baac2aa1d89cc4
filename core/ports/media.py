from typing import Optional, Protocol


class UploadPort(Protocol):
    def delete_video(self, id_token: str, *, ref: str, publish_id: str, video_id: Optional[str]) -> None: ...

    def delete_image(self, id_token: str, *, ref: str) -> None: ...


class StreamPort(Protocol):
    def delete_video(self, video_id: str) -> None: ...

    def create_live_input(self, *, publish_id: str) -> dict: ...

    def get_live_input(self, uid: str) -> dict: ...
