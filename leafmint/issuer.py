"""
leafmint.issuer
~~~~~~~~~~~~~~~
Mints a leaf certificate for one hostname, signed by the local root CA.

Every call generates a brand-new RSA key and a random serial, even for a
hostname seen a moment ago.  Callers that want reuse must cache outside.
"""

from __future__ import annotations

import os
import pathlib
from dataclasses import dataclass, field
from typing import Optional

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.x509.oid import NameOID

from .config import SubjectFields
from .errors import (
    ExtensionBuildError,
    KeyGenerationError,
    NameBuildError,
    SerialNumberError,
    SigningError,
)
from .loader import RootCredential, load_root_credential

LEAF_KEY_SIZE = 2048
PUBLIC_EXPONENT = 65537
SERIAL_BYTES = 16


@dataclass(frozen=True, slots=True)
class LeafCertificateRequest:
    hostname: str
    subject: SubjectFields = field(default_factory=SubjectFields)


@dataclass(frozen=True, slots=True)
class IssuedCertificate:
    certificate: x509.Certificate
    private_key: rsa.RSAPrivateKey

    def certificate_pem(self) -> bytes:
        return self.certificate.public_bytes(serialization.Encoding.PEM)

    def certificate_der(self) -> bytes:
        return self.certificate.public_bytes(serialization.Encoding.DER)

    def private_key_pem(self) -> bytes:
        """Unencrypted PKCS#8, ready for ``ssl.SSLContext.load_cert_chain``."""
        return self.private_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        )


def issue_certificate(
    root_cert_path: str | pathlib.Path,
    root_key_path: str | pathlib.Path,
    hostname: str,
    subject: Optional[SubjectFields] = None,
    password: Optional[bytes] = None,
) -> IssuedCertificate:
    """Load the root CA from disk and mint a certificate for *hostname*.

    Loader errors propagate unchanged; every later step raises its own
    :class:`~leafmint.errors.IssueError` subclass.  Nothing is retried.
    """
    root = load_root_credential(root_cert_path, root_key_path, password)
    request = LeafCertificateRequest(hostname, subject or SubjectFields())
    return sign_leaf(root, request)


def sign_leaf(root: RootCredential, request: LeafCertificateRequest) -> IssuedCertificate:
    """Mint a leaf for an already loaded root credential."""
    try:
        key = rsa.generate_private_key(
            public_exponent=PUBLIC_EXPONENT,
            key_size=LEAF_KEY_SIZE,
        )
    except (ValueError, UnsupportedAlgorithm) as e:
        raise KeyGenerationError(f"cannot generate leaf key: {e}") from e

    ca = root.certificate
    builder = (
        x509.CertificateBuilder()
        .subject_name(_subject_name(request))
        .issuer_name(ca.subject)
        .not_valid_before(ca.not_valid_before_utc)
        .not_valid_after(ca.not_valid_after_utc)
        .public_key(key.public_key())
    )

    try:
        serial = int.from_bytes(os.urandom(SERIAL_BYTES), "big")
        builder = builder.serial_number(serial)
    except (ValueError, OSError) as e:
        raise SerialNumberError(f"cannot build serial number: {e}") from e

    try:
        builder = builder.add_extension(
            x509.SubjectAlternativeName([x509.DNSName(request.hostname)]),
            critical=False,
        )
    except (ValueError, TypeError) as e:
        raise ExtensionBuildError(
            f"cannot build subjectAltName for {request.hostname!r}: {e}"
        ) from e

    try:
        cert = builder.sign(private_key=root.private_key, algorithm=hashes.SHA256())
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise SigningError(f"cannot sign leaf for {request.hostname!r}: {e}") from e

    return IssuedCertificate(certificate=cert, private_key=key)


def _subject_name(request: LeafCertificateRequest) -> x509.Name:
    s = request.subject
    try:
        return x509.Name(
            [
                x509.NameAttribute(NameOID.COUNTRY_NAME, s.country),
                x509.NameAttribute(NameOID.STATE_OR_PROVINCE_NAME, s.state),
                x509.NameAttribute(NameOID.LOCALITY_NAME, s.locality),
                x509.NameAttribute(NameOID.ORGANIZATION_NAME, s.organization),
                x509.NameAttribute(NameOID.ORGANIZATIONAL_UNIT_NAME, s.organizational_unit),
                x509.NameAttribute(NameOID.COMMON_NAME, request.hostname),
            ]
        )
    except (ValueError, TypeError) as e:
        raise NameBuildError(f"cannot build subject for {request.hostname!r}: {e}") from e
