from dataclasses import dataclass, field
import os
from typing import Optional
from dotenv import find_dotenv, load_dotenv

@dataclass(frozen=True)
class SubjectFields:
    country: str = "ZH"
    state: str = "SC"
    locality: str = "YC"
    organization: str = "YC"
    organizational_unit: str = "YC"

@dataclass
class Config:
    root_cert_path: str
    root_key_path: str
    root_key_password: Optional[bytes] = None
    subject: SubjectFields = field(default_factory=SubjectFields)
    log_path: str = "leafmint.log"

def load_config():
    load_dotenv(find_dotenv(usecwd=True), override=True)
    password = os.getenv("LEAFMINT_ROOT_KEY_PASSWORD")
    defaults = SubjectFields()
    return Config(
        root_cert_path=os.getenv("LEAFMINT_ROOT_CERT", "certs/proxylea_cert.crt"),
        root_key_path=os.getenv("LEAFMINT_ROOT_KEY", "certs/proxylea_private.key"),
        root_key_password=password.encode() if password else None,
        subject=SubjectFields(
            country=os.getenv("LEAFMINT_SUBJECT_C", defaults.country),
            state=os.getenv("LEAFMINT_SUBJECT_ST", defaults.state),
            locality=os.getenv("LEAFMINT_SUBJECT_L", defaults.locality),
            organization=os.getenv("LEAFMINT_SUBJECT_O", defaults.organization),
            organizational_unit=os.getenv("LEAFMINT_SUBJECT_OU", defaults.organizational_unit),
        ),
        log_path=os.getenv("LEAFMINT_LOG_PATH", "leafmint.log"),
    )
