"""TomlInfo: typed view over an anchor's stellar.toml (SEP-1).

Only the keys wallets act on are lifted into attributes; the untouched
document stays available in `raw`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


@dataclass(frozen=True, slots=True)
class TomlDocumentation:
    org_name: str | None = None
    org_dba: str | None = None
    org_url: str | None = None
    org_logo: str | None = None
    org_description: str | None = None
    org_physical_address: str | None = None
    org_physical_address_attestation: str | None = None
    org_phone_number: str | None = None
    org_phone_number_attestation: str | None = None
    org_keybase: str | None = None
    org_twitter: str | None = None
    org_github: str | None = None
    org_official_email: str | None = None
    org_support_email: str | None = None
    org_licensing_authority: str | None = None
    org_license_type: str | None = None
    org_license_number: str | None = None


@dataclass(frozen=True, slots=True)
class TomlPrincipal:
    name: str | None = None
    email: str | None = None
    keybase: str | None = None
    telegram: str | None = None
    twitter: str | None = None
    github: str | None = None
    id_photo_hash: str | None = None
    verification_photo_hash: str | None = None


@dataclass(frozen=True, slots=True)
class TomlCurrency:
    code: str | None = None
    code_template: str | None = None
    issuer: str | None = None
    status: str | None = None
    display_decimals: int | None = None
    name: str | None = None
    desc: str | None = None
    conditions: str | None = None
    image: str | None = None
    fixed_number: int | None = None
    max_number: int | None = None
    is_unlimited: bool | None = None
    is_asset_anchored: bool | None = None
    anchor_asset_type: str | None = None
    anchor_asset: str | None = None
    attestation_of_reserve: str | None = None
    redemption_instructions: str | None = None
    collateral_addresses: list[str] | None = None
    collateral_address_messages: list[str] | None = None
    collateral_address_signatures: list[str] | None = None
    regulated: bool | None = None
    approval_server: str | None = None
    approval_criteria: str | None = None


@dataclass(frozen=True, slots=True)
class TomlValidator:
    alias: str | None = None
    display_name: str | None = None
    public_key: str | None = None
    host: str | None = None
    history: str | None = None


@dataclass(frozen=True, slots=True)
class TomlInfo:
    """Parsed stellar.toml. Service URLs are None when the anchor does not advertise them."""

    version: str | None = None
    network_passphrase: str | None = None
    federation_server: str | None = None
    auth_server: str | None = None
    transfer_server: str | None = None
    """SEP-6 endpoint (TRANSFER_SERVER)."""
    transfer_server_sep24: str | None = None
    """SEP-24 endpoint (TRANSFER_SERVER_SEP0024)."""
    kyc_server: str | None = None
    web_auth_endpoint: str | None = None
    signing_key: str | None = None
    horizon_url: str | None = None
    accounts: list[str] = field(default_factory=list)
    uri_request_signing_key: str | None = None
    direct_payment_server: str | None = None
    anchor_quote_server: str | None = None
    documentation: TomlDocumentation = field(default_factory=TomlDocumentation)
    principals: list[TomlPrincipal] = field(default_factory=list)
    currencies: list[TomlCurrency] = field(default_factory=list)
    validators: list[TomlValidator] = field(default_factory=list)
    raw: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def has_sep6(self) -> bool:
        return bool(self.transfer_server)

    @property
    def has_sep10(self) -> bool:
        return bool(self.web_auth_endpoint and self.signing_key)

    @property
    def has_sep12(self) -> bool:
        return bool(self.kyc_server)

    @property
    def has_sep24(self) -> bool:
        return bool(self.transfer_server_sep24)

    @property
    def has_sep38(self) -> bool:
        return bool(self.anchor_quote_server)


def _url(value: Any) -> str | None:
    if not isinstance(value, str) or not value.strip():
        return None
    return value.strip().rstrip("/")


def _table(doc: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = doc.get(key)
    return value if isinstance(value, Mapping) else {}


def _tables(doc: Mapping[str, Any], key: str) -> list[Mapping[str, Any]]:
    value = doc.get(key)
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, Mapping)]


def parse_toml(doc: Mapping[str, Any]) -> TomlInfo:
    """Map a decoded stellar.toml document to TomlInfo.

    Top-level and [DOCUMENTATION] keys are upper-case; [[CURRENCIES]] and
    [[PRINCIPALS]] entries use lower-case keys; [[VALIDATORS]] upper-case.
    """
    d = _table(doc, "DOCUMENTATION")
    documentation = TomlDocumentation(
        org_name=d.get("ORG_NAME"),
        org_dba=d.get("ORG_DBA"),
        org_url=d.get("ORG_URL"),
        org_logo=d.get("ORG_LOGO"),
        org_description=d.get("ORG_DESCRIPTION"),
        org_physical_address=d.get("ORG_PHYSICAL_ADDRESS"),
        org_physical_address_attestation=d.get("ORG_PHYSICAL_ADDRESS_ATTESTATION"),
        org_phone_number=d.get("ORG_PHONE_NUMBER"),
        org_phone_number_attestation=d.get("ORG_PHONE_NUMBER_ATTESTATION"),
        org_keybase=d.get("ORG_KEYBASE"),
        org_twitter=d.get("ORG_TWITTER"),
        org_github=d.get("ORG_GITHUB"),
        org_official_email=d.get("ORG_OFFICIAL_EMAIL"),
        org_support_email=d.get("ORG_SUPPORT_EMAIL"),
        org_licensing_authority=d.get("ORG_LICENSING_AUTHORITY"),
        org_license_type=d.get("ORG_LICENSE_TYPE"),
        org_license_number=d.get("ORG_LICENSE_NUMBER"),
    )

    principals = [
        TomlPrincipal(
            name=p.get("name"),
            email=p.get("email"),
            keybase=p.get("keybase"),
            telegram=p.get("telegram"),
            twitter=p.get("twitter"),
            github=p.get("github"),
            id_photo_hash=p.get("id_photo_hash"),
            verification_photo_hash=p.get("verification_photo_hash"),
        )
        for p in _tables(doc, "PRINCIPALS")
    ]

    currencies = [
        TomlCurrency(
            code=c.get("code"),
            code_template=c.get("code_template"),
            issuer=c.get("issuer"),
            status=c.get("status"),
            display_decimals=c.get("display_decimals"),
            name=c.get("name"),
            desc=c.get("desc"),
            conditions=c.get("conditions"),
            image=c.get("image"),
            fixed_number=c.get("fixed_number"),
            max_number=c.get("max_number"),
            is_unlimited=c.get("is_unlimited"),
            is_asset_anchored=c.get("is_asset_anchored"),
            anchor_asset_type=c.get("anchor_asset_type"),
            anchor_asset=c.get("anchor_asset"),
            attestation_of_reserve=c.get("attestation_of_reserve"),
            redemption_instructions=c.get("redemption_instructions"),
            collateral_addresses=c.get("collateral_addresses"),
            collateral_address_messages=c.get("collateral_address_messages"),
            collateral_address_signatures=c.get("collateral_address_signatures"),
            regulated=c.get("regulated"),
            approval_server=c.get("approval_server"),
            approval_criteria=c.get("approval_criteria"),
        )
        for c in _tables(doc, "CURRENCIES")
    ]

    validators = [
        TomlValidator(
            alias=v.get("ALIAS"),
            display_name=v.get("DISPLAY_NAME"),
            public_key=v.get("PUBLIC_KEY"),
            host=v.get("HOST"),
            history=v.get("HISTORY"),
        )
        for v in _tables(doc, "VALIDATORS")
    ]

    accounts = doc.get("ACCOUNTS")
    return TomlInfo(
        version=doc.get("VERSION"),
        network_passphrase=doc.get("NETWORK_PASSPHRASE"),
        federation_server=_url(doc.get("FEDERATION_SERVER")),
        auth_server=_url(doc.get("AUTH_SERVER")),
        transfer_server=_url(doc.get("TRANSFER_SERVER")),
        transfer_server_sep24=_url(doc.get("TRANSFER_SERVER_SEP0024")),
        kyc_server=_url(doc.get("KYC_SERVER")),
        web_auth_endpoint=_url(doc.get("WEB_AUTH_ENDPOINT")),
        signing_key=doc.get("SIGNING_KEY"),
        horizon_url=_url(doc.get("HORIZON_URL")),
        accounts=list(accounts) if isinstance(accounts, list) else [],
        uri_request_signing_key=doc.get("URI_REQUEST_SIGNING_KEY"),
        direct_payment_server=_url(doc.get("DIRECT_PAYMENT_SERVER")),
        anchor_quote_server=_url(doc.get("ANCHOR_QUOTE_SERVER")),
        documentation=documentation,
        principals=principals,
        currencies=currencies,
        validators=validators,
        raw=dict(doc),
    )
