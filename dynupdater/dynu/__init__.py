"""
Dynu DNS management

Keeps a Dynu domain's address records in line with the host's public
addresses and manages individual TXT records.
"""

from .client import DynuClient
from .exceptions import (
    ConfigurationError,
    DomainNotFoundError,
    DynuClientError,
    DynuRequestError,
    DynuTransportError,
    DynuUpdaterError,
    MissingIdentityError,
    NotFoundError,
    RecordNotFoundError,
)
from .manager import DynuUpdater
from .probe import NetworkProbe
from .types import (
    Addresses,
    ARecord,
    Domain,
    IPFamily,
    Record,
    RecordListT,
    SoaRecord,
    TxtRecord,
    record_id,
    require_id,
)
from .utils import (
    CreateRecord,
    DeleteRecord,
    UpdateRecord,
    addresses_differ,
    apply_addresses,
    find_text_record,
    plan_text_delete,
    plan_text_upsert,
)

__all__ = [
    "DynuClient",
    "DynuUpdater",
    "NetworkProbe",
    "Addresses",
    "ARecord",
    "Domain",
    "IPFamily",
    "Record",
    "RecordListT",
    "SoaRecord",
    "TxtRecord",
    "record_id",
    "require_id",
    "CreateRecord",
    "DeleteRecord",
    "UpdateRecord",
    "addresses_differ",
    "apply_addresses",
    "find_text_record",
    "plan_text_delete",
    "plan_text_upsert",
    "ConfigurationError",
    "DomainNotFoundError",
    "DynuClientError",
    "DynuRequestError",
    "DynuTransportError",
    "DynuUpdaterError",
    "MissingIdentityError",
    "NotFoundError",
    "RecordNotFoundError",
]
