"""
leafmint.loader
~~~~~~~~~~~~~~~
Reads the local root CA (certificate + private key) from PEM files.

Nothing is cached: every call hits the filesystem again, so a rotated
root is picked up by the very next issuance.
"""

from __future__ import annotations

import pathlib
from dataclasses import dataclass
from typing import Optional, Type

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.types import CertificateIssuerPrivateKeyTypes

from .errors import (
    CertificateDecodeError,
    CertificateFileNotFound,
    CredentialIOError,
    KeyDecodeError,
    KeyFileNotFound,
    LoadError,
)


@dataclass(frozen=True, slots=True)
class RootCredential:
    certificate: x509.Certificate
    private_key: CertificateIssuerPrivateKeyTypes


def load_root_credential(
    cert_path: str | pathlib.Path,
    key_path: str | pathlib.Path,
    password: Optional[bytes] = None,
) -> RootCredential:
    """Load and cross-check the root certificate and its private key.

    Raises a :class:`~leafmint.errors.LoadError` subclass on the first
    problem; no partial credential is ever returned.
    """
    cert_bytes = _read(cert_path, CertificateFileNotFound)
    try:
        cert = x509.load_pem_x509_certificate(cert_bytes)
    except ValueError as e:
        raise CertificateDecodeError(cert_path, str(e)) from e

    key_bytes = _read(key_path, KeyFileNotFound)
    try:
        key = serialization.load_pem_private_key(key_bytes, password=password)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise KeyDecodeError(key_path, str(e)) from e

    if _spki(key.public_key()) != _spki(cert.public_key()):
        raise KeyDecodeError(key_path, "key does not match root certificate")

    return RootCredential(certificate=cert, private_key=key)


# ---------------------------------------------------------------------- #
# private
# ---------------------------------------------------------------------- #

def _read(path: str | pathlib.Path, missing: Type[LoadError]) -> bytes:
    p = pathlib.Path(path)
    if not p.exists():
        raise missing(p)
    try:
        return p.read_bytes()
    except OSError as e:
        raise CredentialIOError(p, e.strerror or str(e)) from e


def _spki(public_key) -> bytes:
    return public_key.public_bytes(
        serialization.Encoding.DER,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    )
