"""Response models for the typed Koios operations."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Tip:
    """The latest block seen by the Koios instance (`/tip`)."""

    hash: str | None = None
    epoch_no: int | None = None
    abs_slot: int | None = None
    epoch_slot: int | None = None
    block_no: int | None = None
    block_time: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Tip":
        # Newer API releases renamed block_no to block_height
        block_no = data.get("block_no")
        if block_no is None:
            block_no = data.get("block_height")

        return cls(
            hash=data.get("hash"),
            epoch_no=data.get("epoch_no"),
            abs_slot=data.get("abs_slot"),
            epoch_slot=data.get("epoch_slot"),
            block_no=block_no,
            block_time=data.get("block_time"),
        )


@dataclass(frozen=True)
class Genesis:
    """Genesis parameters of the network (`/genesis`).

    The service returns every value except `systemstart` as a string;
    they are kept as returned.
    """

    networkmagic: str | None = None
    networkid: str | None = None
    epochlength: str | None = None
    slotlength: str | None = None
    maxlovelacesupply: str | None = None
    systemstart: int | None = None
    activeslotcoeff: str | None = None
    slotsperkesperiod: str | None = None
    maxkesrevolutions: str | None = None
    securityparam: str | None = None
    updatequorum: str | None = None
    alonzogenesis: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Genesis":
        return cls(**{name: data.get(name) for name in cls.__dataclass_fields__})


@dataclass(frozen=True)
class Totals:
    """Circulating supply, treasury, rewards and reserves for an epoch (`/totals`)."""

    epoch_no: int | None = None
    circulation: str | None = None
    treasury: str | None = None
    reward: str | None = None
    supply: str | None = None
    reserves: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Totals":
        return cls(**{name: data.get(name) for name in cls.__dataclass_fields__})
