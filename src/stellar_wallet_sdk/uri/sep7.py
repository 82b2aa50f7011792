# -*- coding: utf-8 -*-
"""SEP-7 URI scheme: validate, parse and build web+stellar: payment and transaction requests."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Union
from urllib.parse import parse_qs, urlparse

from stellar_sdk import (
    Asset,
    HashMemo,
    IdMemo,
    Keypair,
    Memo,
    Network,
    ReturnHashMemo,
    StrKey,
    TextMemo,
    TransactionEnvelope,
)
from stellar_sdk.sep.stellar_uri import PayStellarUri, Replacement, TransactionStellarUri

from stellar_wallet_sdk.exceptions import InvalidSep7UriError

WEB_STELLAR_SCHEME = "web+stellar:"
URI_MSG_MAX_LENGTH = 300
SUPPORTED_OPERATIONS = ("tx", "pay")

_HINT_DELIMITER = ";"
_ID_DELIMITER = ":"
_LIST_DELIMITER = ","


@dataclass(frozen=True, slots=True)
class Sep7UriValidation:
    result: bool
    reason: Optional[str] = None


def _first(query: dict[str, list[str]], key: str) -> Optional[str]:
    values = query.get(key)
    return values[0] if values else None


def _is_stellar_address(value: str) -> bool:
    return (
        StrKey.is_valid_ed25519_public_key(value)
        or StrKey.is_valid_med25519_public_key(value)
        or StrKey.is_valid_contract(value)
    )


def is_valid_sep7_uri(uri: str) -> Sep7UriValidation:
    """Check scheme, operation, required parameters and the msg length of a SEP-7 URI."""
    if not uri.startswith(WEB_STELLAR_SCHEME):
        return Sep7UriValidation(False, f"it must start with '{WEB_STELLAR_SCHEME}'")

    parsed = urlparse(uri)
    operation = parsed.path
    query = parse_qs(parsed.query)
    if operation not in SUPPORTED_OPERATIONS:
        return Sep7UriValidation(False, f"operation type '{operation}' is not currently supported")

    if operation == "tx":
        xdr = _first(query, "xdr")
        if not xdr:
            return Sep7UriValidation(False, "operation type 'tx' must have a 'xdr' parameter")
        passphrase = _first(query, "network_passphrase") or Network.PUBLIC_NETWORK_PASSPHRASE
        try:
            TransactionEnvelope.from_xdr(xdr, passphrase)
        except Exception:
            return Sep7UriValidation(
                False,
                "the provided 'xdr' parameter is not a valid transaction envelope "
                f"on the '{passphrase}' network",
            )
    else:
        destination = _first(query, "destination")
        if not destination:
            return Sep7UriValidation(False, "operation type 'pay' must have a 'destination' parameter")
        if not _is_stellar_address(destination):
            return Sep7UriValidation(
                False, "the provided 'destination' parameter is not a valid Stellar address"
            )

    msg = _first(query, "msg")
    if msg is not None and len(msg) > URI_MSG_MAX_LENGTH:
        return Sep7UriValidation(
            False,
            f"the 'msg' parameter should be no longer than {URI_MSG_MAX_LENGTH} characters",
        )
    return Sep7UriValidation(True)


def parse_sep7_uri(
    uri: str, network_passphrase: Optional[str] = None
) -> Union[PayStellarUri, TransactionStellarUri]:
    """Validate uri and return the matching stellar_sdk URI object.

    Args:
        uri: web+stellar:tx?... or web+stellar:pay?...
        network_passphrase: Network used to decode a tx URI's xdr when the
            URI itself carries no network_passphrase (defaults to public).

    Raises:
        InvalidSep7UriError: If the URI is not a valid SEP-7 request.
    """
    validation = is_valid_sep7_uri(uri)
    if not validation.result:
        raise InvalidSep7UriError(validation.reason or "invalid")

    parsed = urlparse(uri)
    if parsed.path == "tx":
        query = parse_qs(parsed.query)
        passphrase = (
            _first(query, "network_passphrase")
            or network_passphrase
            or Network.PUBLIC_NETWORK_PASSPHRASE
        )
        return TransactionStellarUri.from_uri(uri, passphrase)
    return PayStellarUri.from_uri(uri)


def memo_from(memo: Optional[str], memo_type: Optional[str] = None) -> Optional[Memo]:
    """Build a stellar_sdk Memo from a SEP-7 / SEP-24 style (memo, memo_type) pair."""
    if memo is None:
        return None
    kind = (memo_type or "text").lower()
    if kind in ("text", "memo_text"):
        return TextMemo(memo)
    if kind in ("id", "memo_id"):
        return IdMemo(int(memo))
    if kind in ("hash", "memo_hash"):
        return HashMemo(memo)
    if kind in ("return", "memo_return"):
        return ReturnHashMemo(memo)
    raise ValueError(f"unsupported memo_type: {memo_type}")


def sep7_pay_uri(
    destination: str,
    *,
    amount: Optional[str] = None,
    asset_code: Optional[str] = None,
    asset_issuer: Optional[str] = None,
    memo: Optional[str] = None,
    memo_type: Optional[str] = None,
    callback: Optional[str] = None,
    message: Optional[str] = None,
    network_passphrase: Optional[str] = None,
    origin_domain: Optional[str] = None,
    signer: Optional[Union[Keypair, str]] = None,
) -> str:
    """Build a web+stellar:pay URI, signed with signer when given (requires origin_domain)."""
    if message is not None and len(message) > URI_MSG_MAX_LENGTH:
        raise InvalidSep7UriError(
            f"the 'msg' parameter should be no longer than {URI_MSG_MAX_LENGTH} characters"
        )
    asset = None
    if asset_code and asset_code != "XLM":
        asset = Asset(asset_code, asset_issuer)
    uri = PayStellarUri(
        destination=destination,
        amount=amount,
        asset=asset,
        memo=memo_from(memo, memo_type),
        callback=callback,
        message=message,
        network_passphrase=network_passphrase,
        origin_domain=origin_domain,
    )
    if signer is not None:
        uri.sign(signer)
    return uri.to_uri()


def sep7_tx_uri(
    envelope: Union[TransactionEnvelope, str],
    *,
    replacements: Iterable[Replacement] = (),
    callback: Optional[str] = None,
    pubkey: Optional[str] = None,
    message: Optional[str] = None,
    network_passphrase: Optional[str] = None,
    origin_domain: Optional[str] = None,
    signer: Optional[Union[Keypair, str]] = None,
) -> str:
    """Build a web+stellar:tx URI for envelope (object or XDR)."""
    if message is not None and len(message) > URI_MSG_MAX_LENGTH:
        raise InvalidSep7UriError(
            f"the 'msg' parameter should be no longer than {URI_MSG_MAX_LENGTH} characters"
        )
    if isinstance(envelope, str):
        envelope = TransactionEnvelope.from_xdr(
            envelope, network_passphrase or Network.PUBLIC_NETWORK_PASSPHRASE
        )
    uri = TransactionStellarUri(
        transaction_envelope=envelope,
        replace=list(replacements) or None,
        callback=callback,
        pubkey=pubkey,
        message=message,
        network_passphrase=network_passphrase,
        origin_domain=origin_domain,
    )
    if signer is not None:
        uri.sign(signer)
    return uri.to_uri()


def sep7_replacements_from_string(replacements: Optional[str]) -> list[Replacement]:
    """Parse a SEP-7 `replace` value, e.g. "sourceAccount:X,seqNum:Y;X:account,Y:sequence"."""
    if not replacements:
        return []
    txrep, _, hints_part = replacements.partition(_HINT_DELIMITER)
    hints: dict[str, str] = {}
    for item in hints_part.split(_LIST_DELIMITER) if hints_part else []:
        ref, _, hint = item.partition(_ID_DELIMITER)
        hints[ref] = hint
    result: list[Replacement] = []
    for item in txrep.split(_LIST_DELIMITER):
        path, _, ref = item.partition(_ID_DELIMITER)
        result.append(Replacement(path, ref, hints.get(ref, "")))
    return result


def sep7_replacements_to_string(replacements: Iterable[Replacement]) -> str:
    items = list(replacements)
    if not items:
        return ""
    hints: dict[str, str] = {}
    for r in items:
        hints[r.reference_identifier] = r.hint
    txrep = _LIST_DELIMITER.join(f"{r.txrep_tx_field_name}{_ID_DELIMITER}{r.reference_identifier}" for r in items)
    hints_str = _LIST_DELIMITER.join(f"{k}{_ID_DELIMITER}{v}" for k, v in hints.items())
    return f"{txrep}{_HINT_DELIMITER}{hints_str}"
