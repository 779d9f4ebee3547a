"""
Dynu type definitions for the dynu module
"""

from enum import Enum
from typing import Annotated, Literal, NamedTuple, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

from .exceptions import MissingIdentityError

# Basic types
RecordIdT = int
DomainIdT = int


class IPFamily(Enum):
    V4 = "ipv4"
    V6 = "ipv6"


class Addresses(NamedTuple):
    """IPv4/IPv6 pair, either detected for this host or resolved for a domain"""

    v4: Optional[str] = None
    v6: Optional[str] = None


class DynuModel(BaseModel):
    """Base for models exchanged with the Dynu API (camelCase on the wire)"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class Domain(DynuModel):
    """A DNS zone managed in Dynu. Domains are provisioned out of band."""

    id: Optional[DomainIdT] = None
    name: str
    unicode_name: str = ""
    token: Optional[str] = None
    state: str = ""
    group: str = ""
    ipv4_address: Optional[str] = None
    ipv6_address: Optional[str] = None
    ttl: int = 120
    ipv4: bool = True
    ipv6: bool = True
    ipv4_wildcard_alias: bool = False
    ipv6_wildcard_alias: bool = False
    created_on: Optional[str] = None
    updated_on: Optional[str] = None

    @property
    def addresses(self) -> Addresses:
        return Addresses(v4=self.ipv4_address, v6=self.ipv6_address)


class RecordFields(DynuModel):
    """Fields carried by every record kind"""

    id: Optional[RecordIdT] = None
    domain_id: Optional[DomainIdT] = None
    domain_name: Optional[str] = None
    node_name: str
    hostname: Optional[str] = None
    ttl: int
    state: bool = True
    content: Optional[str] = None
    updated_on: Optional[str] = None


class ARecord(RecordFields):
    record_type: Literal["A"] = "A"
    group: str = ""


class TxtRecord(RecordFields):
    record_type: Literal["TXT"] = "TXT"
    text_data: str

    @classmethod
    def new(cls, node_name: str, text_data: str, ttl: int) -> "TxtRecord":
        """A TXT record that does not exist remotely yet; Dynu assigns the id."""
        return cls(node_name=node_name, text_data=text_data, ttl=ttl, state=True)

    @classmethod
    def targeting(
        cls, record_id: RecordIdT, node_name: str, text_data: str, ttl: int
    ) -> "TxtRecord":
        """A TXT record replacing the fields of the existing record record_id."""
        return cls(
            id=record_id, node_name=node_name, text_data=text_data, ttl=ttl, state=True
        )


class SoaRecord(RecordFields):
    record_type: Literal["SOA"] = "SOA"
    master_name: str
    responsible_name: str
    refresh: int
    retry: int
    expire: int
    negative_ttl: int = Field(alias="negativeTTL")


Record = Annotated[
    Union[ARecord, TxtRecord, SoaRecord],
    Field(discriminator="record_type"),
]
RecordListT = list[Record]

RECORD_TYPES = ("A", "TXT", "SOA")

record_adapter: TypeAdapter[Record] = TypeAdapter(Record)


def record_id(record: Record) -> Optional[RecordIdT]:
    """Identity of any record kind, None for records not created yet"""
    return record.id


def require_id(entity: Domain | RecordFields) -> int:
    """
    Return the identity of a domain or record.

    Raises:
        MissingIdentityError: the entity was never created remotely
    """
    if entity.id is None:
        raise MissingIdentityError(
            f"{type(entity).__name__} has no id, it cannot be targeted remotely"
        )
    return entity.id
