from __future__ import annotations

import pytest

from install.credentials import IdentityCrypto
from models.identities import Identity, IdentitySecret


def test_secret_is_hashed_and_verifiable(stores) -> None:
    identity = stores.identities.save(Identity(principal="alice@example.com"))
    crypto = IdentityCrypto(stores.session, method="pbkdf2:sha256")

    secret = crypto.create_identity_secret(identity, "s3cret", False)
    stores.session.commit()

    assert secret.secret_hash != "s3cret"
    assert secret.secret_hash.startswith("pbkdf2:sha256")
    assert secret.expired is False
    assert crypto.verify(identity, "s3cret") is True
    assert crypto.verify(identity, "wrong") is False


def test_existing_secret_is_kept(stores) -> None:
    identity = stores.identities.save(Identity(principal="alice@example.com"))
    crypto = IdentityCrypto(stores.session, method="pbkdf2:sha256")

    first = crypto.create_identity_secret(identity, "one")
    second = crypto.create_identity_secret(identity, "two", expired=True)
    stores.session.commit()

    assert second is first
    assert stores.session.query(IdentitySecret).count() == 1
    assert crypto.verify(identity, "one") is True


def test_identity_without_secret_never_verifies(stores) -> None:
    identity = stores.identities.save(Identity(principal="nobody@example.com"))
    assert IdentityCrypto(stores.session).verify(identity, "") is False


def test_empty_plaintext_rejected(stores) -> None:
    identity = stores.identities.save(Identity(principal="alice@example.com"))
    with pytest.raises(ValueError):
        IdentityCrypto(stores.session).create_identity_secret(identity, "")
