from typing import Protocol


class WalletPort(Protocol):
    def verify_user(self, id_token: str) -> str: ...

    def get_wallet_address(self, id_token: str) -> str: ...

    def create_wallet(self, id_token: str) -> dict: ...

    def get_balance(self, id_token: str, *, address: str) -> str: ...

    def calculate_tips(self, id_token: str, *, qty: int) -> float: ...

    def send_tips(self, id_token: str, *, to: str, qty: int) -> dict: ...
