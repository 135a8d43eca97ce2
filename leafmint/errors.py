"""
leafmint.errors
~~~~~~~~~~~~~~~
Everything that can go wrong while minting a leaf certificate.

Categories:
  configuration  root files missing / unreadable, needs an operator
  decode         root material is corrupt or in the wrong format
  crypto         key generation or signing failed (entropy, backend)
  construction   name / serial / extension could not be built
"""

from __future__ import annotations

from pathlib import Path

CONFIGURATION = "configuration"
DECODE = "decode"
CRYPTO = "crypto"
CONSTRUCTION = "construction"


class IssueError(Exception):
    category = CONSTRUCTION

    def __init__(self, msg: str):
        self.msg = msg
        super().__init__(msg)


class LoadError(IssueError):
    """Root credential could not be loaded from *path*."""

    category = CONFIGURATION
    what = "root credential"

    def __init__(self, path: str | Path, detail: str = ""):
        self.path = str(path)
        msg = f"{self.what}: {self.path}"
        if detail:
            msg += f" ({detail})"
        super().__init__(msg)


class CertificateFileNotFound(LoadError):
    what = "root certificate file not found"


class KeyFileNotFound(LoadError):
    what = "root key file not found"


class CredentialIOError(LoadError):
    what = "cannot read root credential file"


class CertificateDecodeError(LoadError):
    category = DECODE
    what = "cannot decode root certificate"


class KeyDecodeError(LoadError):
    category = DECODE
    what = "cannot decode root private key"


class KeyGenerationError(IssueError):
    category = CRYPTO


class SigningError(IssueError):
    category = CRYPTO


class NameBuildError(IssueError):
    pass


class SerialNumberError(IssueError):
    pass


class ExtensionBuildError(IssueError):
    pass
