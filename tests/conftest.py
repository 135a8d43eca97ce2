import datetime
from dataclasses import dataclass
from pathlib import Path

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.x509.oid import NameOID

from leafmint.config import Config


@dataclass
class RootFiles:
    cert: x509.Certificate
    key: rsa.RSAPrivateKey
    cert_path: Path
    key_path: Path


def make_root(key, name="leafmint test root", not_before=None, not_after=None):
    now = datetime.datetime.now(datetime.timezone.utc)
    subject = issuer = x509.Name([
        x509.NameAttribute(NameOID.COUNTRY_NAME, "NL"),
        x509.NameAttribute(NameOID.ORGANIZATION_NAME, "leafmint"),
        x509.NameAttribute(NameOID.COMMON_NAME, name),
    ])
    algorithm = hashes.SHA256() if isinstance(key, rsa.RSAPrivateKey) else None
    return (
        x509.CertificateBuilder()
        .subject_name(subject)
        .issuer_name(issuer)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(not_before or now - datetime.timedelta(days=1))
        .not_valid_after(not_after or now + datetime.timedelta(days=3650))
        .add_extension(x509.BasicConstraints(ca=True, path_length=None), critical=True)
        .sign(private_key=key, algorithm=algorithm)
    )


def write_root(directory: Path, cert, key, password=None) -> RootFiles:
    directory.mkdir(parents=True, exist_ok=True)
    cert_path = directory / "ca.cert.pem"
    key_path = directory / "ca.key.pem"
    encryption = (
        serialization.BestAvailableEncryption(password)
        if password else serialization.NoEncryption()
    )
    cert_path.write_bytes(cert.public_bytes(serialization.Encoding.PEM))
    key_path.write_bytes(
        key.private_bytes(
            serialization.Encoding.PEM,
            serialization.PrivateFormat.PKCS8,
            encryption,
        )
    )
    return RootFiles(cert=cert, key=key, cert_path=cert_path, key_path=key_path)


@pytest.fixture(scope="session")
def root_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def root(tmp_path_factory, root_key):
    cert = make_root(root_key)
    return write_root(tmp_path_factory.mktemp("root"), cert, root_key)


@pytest.fixture
def config(root, tmp_path):
    return Config(
        root_cert_path=str(root.cert_path),
        root_key_path=str(root.key_path),
        log_path=str(tmp_path / "leafmint.log"),
    )
