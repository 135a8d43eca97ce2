"""
leafmint.service
~~~~~~~~~~~~~~~~
Host-facing entry point: the proxy asks for a certificate by hostname,
the root CA locations come from configuration.
"""

from __future__ import annotations

import time
from typing import Optional

from .config import Config, load_config
from .errors import IssueError
from .issuer import IssuedCertificate, issue_certificate
from .logger import IssuanceLogger


def get_certificate_for_host(hostname: str, config: Optional[Config] = None) -> IssuedCertificate:
    return LeafService(config or load_config()).certificate_for_host(hostname)


class LeafService:
    def __init__(self, cfg: Config) -> None:
        self.cfg = cfg
        self.logger = IssuanceLogger()

    def certificate_for_host(self, hostname: str) -> IssuedCertificate:
        """Mint a fresh certificate for *hostname*.

        Errors are logged and re-raised untouched; deciding whether to
        abort the handshake is up to the caller.
        """
        start_ts = time.time()
        self.logger.request(hostname)
        try:
            issued = issue_certificate(
                self.cfg.root_cert_path,
                self.cfg.root_key_path,
                hostname,
                subject=self.cfg.subject,
                password=self.cfg.root_key_password,
            )
        except IssueError as e:
            self.logger.fail(hostname, e.category, str(e))
            raise

        self.logger.issued(
            hostname,
            issued.certificate.serial_number,
            int((time.time() - start_ts) * 1000),
        )
        return issued
