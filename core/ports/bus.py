from typing import Iterator, Optional, Protocol


class MessageBusPort(Protocol):
    def publish(self, topic: str, payload: str) -> None: ...

    def listen(self, subscription: str) -> Iterator[str]: ...


class SessionCachePort(Protocol):
    def set_default_profile(self, address: str, profile_id: str) -> None: ...

    def get_default_profile(self, address: str) -> Optional[str]: ...
