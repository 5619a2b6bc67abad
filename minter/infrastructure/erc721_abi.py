"""Fallback ABI used when no compiled collection ABI is configured (ERC-721 subset)."""


def _fn(name, inputs, outputs, mutability="view"):
    return {
        "type": "function",
        "name": name,
        "stateMutability": mutability,
        "inputs": [{"name": n, "type": t} for n, t in inputs],
        "outputs": [{"name": "", "type": t} for t in outputs],
    }


ERC721_ABI: list[dict] = [
    _fn("name", [], ["string"]),
    _fn("symbol", [], ["string"]),
    _fn("totalSupply", [], ["uint256"]),
    _fn("balanceOf", [("owner", "address")], ["uint256"]),
    _fn("ownerOf", [("tokenId", "uint256")], ["address"]),
    _fn("tokenURI", [("tokenId", "uint256")], ["string"]),
    _fn("approve", [("to", "address"), ("tokenId", "uint256")], [], "nonpayable"),
    _fn(
        "transferFrom",
        [("from", "address"), ("to", "address"), ("tokenId", "uint256")],
        [], "nonpayable",
    ),
]
