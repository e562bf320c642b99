"""
Asset record data model

Plain dataclasses for the asset wire shape. Persistence is owned elsewhere, so
these carry no ORM state; ``from_dict``/``to_dict`` translate the camelCase
payload used by discovery sources and the REST layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Mapping, Optional

from itam_engine.buisness.assets.errors import AssetPayloadError


class AssetState:
    """Lifecycle states"""

    ORDERED = 'Ordered'
    RECEIVED = 'Received'
    IN_STAGING = 'In Staging'
    IN_SERVICE = 'In Service'
    IN_REPAIR = 'In Repair'
    IN_LOANER = 'In Loaner'
    LOST = 'Lost'
    RETIRED = 'Retired'
    DISPOSED = 'Disposed'

    ALL = (
        ORDERED, RECEIVED, IN_STAGING, IN_SERVICE, IN_REPAIR,
        IN_LOANER, LOST, RETIRED, DISPOSED,
    )


class AssetClass:
    """Asset categories"""

    LAPTOP = 'Laptop'
    DESKTOP = 'Desktop'
    PHONE = 'Phone'
    TABLET = 'Tablet'
    MONITOR = 'Monitor'
    DOCK = 'Dock'
    KEYBOARD = 'Keyboard'
    MOUSE = 'Mouse'
    HEADSET = 'Headset'
    WEBCAM = 'Webcam'
    ACCESSORY = 'Accessory'
    SERVER = 'Server'
    NETWORK_DEVICE = 'Network Device'
    SAAS_LICENSE = 'SaaS license'
    OTHER = 'Other'


WIPE_CERT = 'WipeCert'


def _clean(mapping: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in mapping.items() if value is not None}


@dataclass(frozen=True)
class AssetOwner:
    user_id: Optional[str] = None
    upn: Optional[str] = None
    display_name: Optional[str] = None
    department: Optional[str] = None
    cost_center: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AssetOwner:
        return cls(
            user_id=data.get('userId'),
            upn=data.get('upn'),
            display_name=data.get('displayName'),
            department=data.get('department'),
            cost_center=data.get('costCenter'),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _clean({
            'userId': self.user_id,
            'upn': self.upn,
            'displayName': self.display_name,
            'department': self.department,
            'costCenter': self.cost_center,
        })


@dataclass(frozen=True)
class AssetLocation:
    region: Optional[str] = None
    site: Optional[str] = None
    room: Optional[str] = None
    rack: Optional[str] = None
    bin: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AssetLocation:
        return cls(
            region=data.get('region'),
            site=data.get('site'),
            room=data.get('room'),
            rack=data.get('rack'),
            bin=data.get('bin'),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _clean({
            'region': self.region,
            'site': self.site,
            'room': self.room,
            'rack': self.rack,
            'bin': self.bin,
        })


@dataclass(frozen=True)
class WarrantyInfo:
    provider: Optional[str] = None
    start: Optional[str] = None  # ISO date
    end: Optional[str] = None  # ISO date

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> WarrantyInfo:
        return cls(provider=data.get('provider'), start=data.get('start'), end=data.get('end'))

    def to_dict(self) -> Dict[str, Any]:
        return _clean({'provider': self.provider, 'start': self.start, 'end': self.end})


@dataclass(frozen=True)
class PurchaseInfo:
    po: Optional[str] = None
    date: Optional[str] = None  # ISO date
    unit_cost: Optional[float] = None
    vendor: Optional[str] = None
    invoice: Optional[str] = None
    cost_center: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PurchaseInfo:
        return cls(
            po=data.get('po'),
            date=data.get('date'),
            unit_cost=data.get('unitCost'),
            vendor=data.get('vendor'),
            invoice=data.get('invoice'),
            cost_center=data.get('costCenter'),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _clean({
            'po': self.po,
            'date': self.date,
            'unitCost': self.unit_cost,
            'vendor': self.vendor,
            'invoice': self.invoice,
            'costCenter': self.cost_center,
        })


@dataclass(frozen=True)
class SecurityInfo:
    edr: Optional[str] = None
    edr_status: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SecurityInfo:
        return cls(edr=data.get('edr'), edr_status=data.get('edrStatus'))

    def to_dict(self) -> Dict[str, Any]:
        return _clean({'edr': self.edr, 'edrStatus': self.edr_status})


@dataclass(frozen=True)
class AssetDocument:
    type: str
    url: Optional[str] = None
    title: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AssetDocument:
        return cls(type=data.get('type'), url=data.get('url'), title=data.get('title'))

    def to_dict(self) -> Dict[str, Any]:
        return _clean({'type': self.type, 'url': self.url, 'title': self.title})


def _nested(data: Mapping[str, Any], key: str, model):
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise AssetPayloadError(f"Field '{key}' must be an object")
    return model.from_dict(value)


@dataclass(frozen=True)
class AssetRecord:
    """
    Central asset entity.

    Every field is optional so partial create/update payloads can be
    validated and reported on instead of rejected at parse time.
    ``device_guids`` stays ``None`` when absent, which validation treats
    differently from an empty mapping.
    """

    global_asset_id: Optional[str] = None
    asset_class: Optional[str] = None
    manufacturer: Optional[str] = None
    model: Optional[str] = None
    serial_number: Optional[str] = None
    asset_tag: Optional[str] = None
    state: Optional[str] = None
    owner: Optional[AssetOwner] = None
    location: Optional[AssetLocation] = None
    warranty: Optional[WarrantyInfo] = None
    purchase: Optional[PurchaseInfo] = None
    device_guids: Optional[Dict[str, str]] = None
    docs: List[AssetDocument] = field(default_factory=list)
    security: Optional[SecurityInfo] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    _FIELD_KEYS = (
        'globalAssetId', 'class', 'manufacturer', 'model', 'serialNumber',
        'assetTag', 'state', 'owner', 'location', 'warranty', 'purchase',
        'deviceGuids', 'docs', 'security', 'createdAt', 'updatedAt',
    )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AssetRecord:
        """
        Build a record from the camelCase wire shape.

        Raises:
            AssetPayloadError: If the payload or a nested section has the wrong type
        """
        if isinstance(data, AssetRecord):
            return data
        if not isinstance(data, Mapping):
            raise AssetPayloadError("Asset payload must be an object")

        device_guids = data.get('deviceGuids')
        if device_guids is not None and not isinstance(device_guids, Mapping):
            raise AssetPayloadError("Field 'deviceGuids' must be an object")

        docs = data.get('docs') or []
        if not isinstance(docs, list):
            raise AssetPayloadError("Field 'docs' must be a list")

        return cls(
            global_asset_id=data.get('globalAssetId'),
            asset_class=data.get('class'),
            manufacturer=data.get('manufacturer'),
            model=data.get('model'),
            serial_number=data.get('serialNumber'),
            asset_tag=data.get('assetTag'),
            state=data.get('state'),
            owner=_nested(data, 'owner', AssetOwner),
            location=_nested(data, 'location', AssetLocation),
            warranty=_nested(data, 'warranty', WarrantyInfo),
            purchase=_nested(data, 'purchase', PurchaseInfo),
            device_guids=dict(device_guids) if device_guids is not None else None,
            docs=[AssetDocument.from_dict(doc) for doc in docs if isinstance(doc, Mapping)],
            security=_nested(data, 'security', SecurityInfo),
            created_at=data.get('createdAt'),
            updated_at=data.get('updatedAt'),
            extra={key: value for key, value in data.items() if key not in cls._FIELD_KEYS},
        )

    def to_dict(self) -> Dict[str, Any]:
        payload = dict(self.extra)
        payload.update({
            'globalAssetId': self.global_asset_id,
            'class': self.asset_class,
            'manufacturer': self.manufacturer,
            'model': self.model,
            'serialNumber': self.serial_number,
            'assetTag': self.asset_tag,
            'state': self.state,
            'owner': self.owner.to_dict() if self.owner else None,
            'location': self.location.to_dict() if self.location else None,
            'warranty': self.warranty.to_dict() if self.warranty else None,
            'purchase': self.purchase.to_dict() if self.purchase else None,
            'deviceGuids': dict(self.device_guids) if self.device_guids is not None else None,
            'docs': [doc.to_dict() for doc in self.docs],
            'security': self.security.to_dict() if self.security else None,
            'createdAt': self.created_at,
            'updatedAt': self.updated_at,
        })
        return payload

    def has_document(self, doc_type: str) -> bool:
        return any(doc.type == doc_type for doc in self.docs)

    def with_changes(self, **changes) -> AssetRecord:
        """Return a copy with the given fields replaced"""
        return replace(self, **changes)


def coerce_asset(asset) -> AssetRecord:
    """Accept either a record or its wire mapping"""
    if isinstance(asset, AssetRecord):
        return asset
    return AssetRecord.from_dict(asset if asset is not None else {})
