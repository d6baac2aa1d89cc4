import pytest
from eth_account import Account as EthAccount
from eth_account.messages import encode_defunct

from core.authenticity import Authenticator
from core.errors import AppError, ErrorKind
from core.identity import InvalidSignatureError, recover_address
from models import Account, AccountType, Profile

MESSAGE = "Sign in to the platform"


class UnknownUidWallet:
    def verify_user(self, id_token):
        return "not-linked"


def signed(private_key, message=MESSAGE):
    signature = EthAccount.sign_message(encode_defunct(text=message), private_key=private_key).signature
    return "0x" + bytes(signature).hex()


@pytest.fixture
def eth_account():
    return EthAccount.create()


@pytest.fixture
def wallet_account(test_db, eth_account):
    owner = eth_account.address.lower()
    account = Account(id="account-wallet", owner=owner, type=AccountType.WALLET)
    test_db.add(account)
    test_db.add(Profile(id="profile-wallet", owner=owner, account_id=account.id, name="walletuser", display_name="W"))
    test_db.commit()
    return account


def test_recover_address(eth_account):
    assert recover_address(signed(eth_account.key), message=MESSAGE) == eth_account.address


def test_recover_address_rejects_malformed_signature():
    with pytest.raises(InvalidSignatureError):
        recover_address("0x1234", message=MESSAGE)


def test_signature_resolves_wallet_account(test_db, eth_account, wallet_account):
    authenticator = Authenticator(
        UnknownUidWallet(), id_token="token", signature=signed(eth_account.key), message=MESSAGE
    )
    profile = authenticator.require_profile(
        test_db, account_id=wallet_account.id, owner=eth_account.address, profile_id="profile-wallet"
    )
    assert profile.id == "profile-wallet"


def test_signature_over_other_message_is_rejected(test_db, eth_account, wallet_account):
    authenticator = Authenticator(
        UnknownUidWallet(), id_token="token", signature=signed(eth_account.key, "other"), message=MESSAGE
    )
    with pytest.raises(AppError) as error:
        authenticator.validate(test_db, account_id=wallet_account.id, owner=wallet_account.owner)
    assert error.value.kind == ErrorKind.UN_AUTHORIZED


def test_owner_must_match_claimed_account(test_db, wallet, alice, bob):
    authenticator = Authenticator(wallet, id_token="token-alice", signature=None, message=MESSAGE)
    with pytest.raises(AppError) as error:
        authenticator.validate(test_db, account_id=alice["account_id"], owner=bob["owner"])
    assert error.value.kind == ErrorKind.UN_AUTHORIZED

    with pytest.raises(AppError):
        authenticator.validate(test_db, account_id=bob["account_id"], owner=bob["owner"])


def test_require_profile_errors(test_db, wallet, alice, bob):
    authenticator = Authenticator(wallet, id_token="token-alice", signature=None, message=MESSAGE)
    with pytest.raises(AppError) as missing:
        authenticator.require_profile(test_db, account_id=alice["account_id"], owner=alice["owner"], profile_id="nope")
    assert missing.value.kind == ErrorKind.NOT_FOUND

    with pytest.raises(AppError) as foreign:
        authenticator.require_profile(
            test_db, account_id=alice["account_id"], owner=alice["owner"], profile_id=bob["profile_id"]
        )
    assert foreign.value.kind == ErrorKind.UN_AUTHORIZED


def test_is_authentic_soft_fails(test_db, wallet, alice, bob):
    authenticator = Authenticator(wallet, id_token="token-alice", signature=None, message=MESSAGE)
    assert authenticator.is_authentic(test_db, **alice) is True
    assert authenticator.is_authentic(test_db, **dict(alice, profile_id=bob["profile_id"])) is False
