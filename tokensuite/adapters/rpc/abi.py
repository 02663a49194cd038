"""
ABI fragment for the operator surface of an ERC-777 style token.

Only the functions the suite calls are listed; a full contract ABI passed
to Web3TokenAdapter works as well.
"""

from __future__ import annotations

from typing import Any


def _fn(
    name: str,
    inputs: list[tuple[str, str]],
    outputs: list[str] | None = None,
    view: bool = False,
) -> dict[str, Any]:
    return {
        "type": "function",
        "name": name,
        "inputs": [{"name": n, "type": t} for n, t in inputs],
        "outputs": [{"name": "", "type": t} for t in (outputs or [])],
        "stateMutability": "view" if view else "nonpayable",
    }


ERC777_OPERATOR_ABI: list[dict[str, Any]] = [
    _fn("name", [], ["string"], view=True),
    _fn("symbol", [], ["string"], view=True),
    _fn("decimals", [], ["uint8"], view=True),
    _fn("totalSupply", [], ["uint256"], view=True),
    _fn("balanceOf", [("_tokenHolder", "address")], ["uint256"], view=True),
    _fn(
        "isOperatorFor",
        [("_operator", "address"), ("_tokenHolder", "address")],
        ["bool"],
        view=True,
    ),
    _fn("authorizeOperator", [("_operator", "address")]),
    _fn("revokeOperator", [("_operator", "address")]),
    _fn(
        "operatorSend",
        [
            ("_from", "address"),
            ("_to", "address"),
            ("_amount", "uint256"),
            ("_userData", "bytes"),
            ("_operatorData", "bytes"),
        ],
    ),
    _fn(
        "mint",
        [
            ("_tokenHolder", "address"),
            ("_amount", "uint256"),
            ("_operatorData", "bytes"),
        ],
    ),
]
