import pytest

from lexsign_core.crypto import generate, K256, P256
from lexsign_core.envelope import sign_record, verify_record, is_signed_by
from lexsign_core.errors import SignatureMismatch
from lexsign_core.keys import generate_keypair, load_and_verify
from lexsign_core.record import LexiconRecord
from lexsign_core.storage import save_keypair, load_keypair


def test_sign_verify():
    priv = generate()
    pub = priv.public_key()
    rec = LexiconRecord(text="Hello, AT Protocol!", author="did:plc:example123")
    rec = sign_record(rec, priv)
    verify_record(rec, pub)
    assert is_signed_by(rec, pub)


@pytest.mark.parametrize("key_type", [P256, K256])
def test_generate_save_load_sign(tmp_path, key_type):
    kp = generate_keypair(key_type)
    path = save_keypair(kp, tmp_path / "keys")
    loaded = load_keypair(path)
    assert loaded == kp

    priv, pub = load_and_verify(loaded)
    rec = LexiconRecord(text="signed with a stored key", created_at="2023-04-10T12:00:00Z")
    rec.sign(priv)
    rec.verify_signature(pub)


def test_signature_from_other_key_rejected():
    signer = generate()
    other = generate().public_key()
    rec = LexiconRecord(text="hi").sign(signer)
    with pytest.raises(SignatureMismatch):
        rec.verify_signature(other)
    assert not is_signed_by(rec, other)
