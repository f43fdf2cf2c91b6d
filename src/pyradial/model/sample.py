"""Built-in sample network used by the CLI and as the reset baseline.

Positions are relative to the parent node.
"""

from typing import Any

from pyradial.model.loader import tree_from_dict
from pyradial.model.tree import Tree
from pyradial.style.materials import apply_materials

FAMILY_PRIMARY_COLORS: dict[str, str] = {
    "center": "#FFD700",  # gold
    "tokenized-assets": "#4A90E2",  # blue
    "staking": "#9B59B6",  # purple
    "supply-chain": "#E67E22",  # orange
}


def _leaf(node_id: str, name: str, position: tuple[float, float, float], protocols: list[str], income: list[str], description: str = "") -> dict[str, Any]:
    return {
        "id": node_id,
        "name": name,
        "position": list(position),
        "protocols": protocols,
        "income": income,
        "description": description,
    }


def sample_definition() -> dict[str, Any]:
    """Return the sample network definition as plain data."""
    nfts = _leaf("nfts", "NFTs", (-3, 3, 1), ["Ethereum", "Polygon", "Solana", "Flow", "Tezos"], ["Creators", "Investors"],
                 "Unique digital items with verifiable ownership.")
    nfts["children"] = [
        _leaf("art-nfts", "Art NFTs", (-2, 2, 1), ["Ethereum", "Tezos", "Flow", "Solana"], ["Creators"]),
        _leaf("gaming-nfts", "Gaming NFTs", (2, -2, -1), ["Polygon", "Solana", "Immutable X", "Flow"], ["Creators", "Project"]),
    ]

    validators = _leaf("validators", "Validators", (2.5, 2, -1), ["Ethereum", "Cosmos", "Polkadot", "Solana"], ["Investors"])
    validators["children"] = [
        _leaf("validator-rewards", "Validator Rewards", (1.5, 1.5, 0.5), ["Ethereum", "Cosmos", "Polkadot"], ["Investors"]),
        _leaf("slashing-events", "Slashing Events", (-1.5, -1.5, -0.5), ["Ethereum", "Solana", "Polkadot"], ["None"]),
    ]

    pos = _leaf("pos", "Proof of Stake", (3, 1.5, -1), ["Ethereum", "Cosmos", "Polkadot", "Cardano"], ["Investors"])
    pos["children"] = [
        validators,
        _leaf("delegators", "Delegators", (-2.5, -1, 2), ["Cosmos", "Polkadot", "Cardano", "Tezos"], ["Investors"]),
        _leaf("pos-rewards", "POS Rewards", (1, 4.5, 0), ["Ethereum", "Cosmos", "Polkadot", "Cardano"], ["Investors"]),
        _leaf("slashing", "Slashing", (3.5, 2, 1), ["Ethereum", "Cosmos", "Polkadot", "Solana"], ["None"]),
    ]

    liquidity = _leaf("liquidity", "Liquidity Mining", (1.5, -3, 1.5), ["Ethereum", "Polygon", "Avalanche", "BSC"], ["Investors"])
    liquidity["children"] = [
        _leaf("yield-farming", "Yield Farming", (2.5, -1.5, 1), ["Ethereum", "Polygon", "Avalanche", "BSC"], ["Investors"]),
        _leaf("liquidity-pools", "Liquidity Pools", (-2, -1.5, 0.5), ["Ethereum", "Polygon", "Avalanche", "BSC"], ["Investors"]),
        _leaf("impermanent-loss", "Impermanent Loss", (0.5, -3, -1), ["Ethereum", "Polygon", "Avalanche"], ["None"]),
    ]

    tokenized = _leaf("tokenized-assets", "Tokenized Assets", (0, 5, 0), ["Ethereum", "Polygon", "Solana", "Flow"], ["Investors", "Creators"],
                      "Real-world and virtual assets represented on chain.")
    tokenized["children"] = [
        nfts,
        _leaf("defi", "DeFi", (0, 3, 3), ["Ethereum", "Polygon", "Avalanche", "BSC"], ["Investors"]),
        _leaf("real-estate", "Real Estate", (3, 3, 1), ["Ethereum", "Polygon", "Avalanche"], ["Investors"]),
    ]

    staking = _leaf("staking", "Staking", (4.5, -2.5, 0), ["Ethereum", "Cosmos", "Polkadot", "Cardano", "Solana"], ["Investors"],
                    "Locking tokens as collateral to secure proof-of-stake networks.")
    staking["children"] = [
        pos,
        liquidity,
        _leaf("governance", "Governance", (4, -1.5, 0), ["Ethereum", "Cosmos", "Polkadot", "Compound"], ["Project"]),
    ]

    supply_chain = _leaf("supply-chain", "Resource Supply Chain", (-4.5, -2.5, 0), ["Ethereum", "Hyperledger", "VeChain", "Polygon"], ["Project"],
                         "Tracking and verification of goods through their lifecycle.")
    supply_chain["children"] = [
        _leaf("tracking", "Asset Tracking", (-3, 1.5, 1.5), ["Ethereum", "Hyperledger", "VeChain"], ["Project"]),
        _leaf("verification", "Verification", (-4, -1.5, -1.5), ["Ethereum", "Hyperledger", "Polygon"], ["Project"]),
        _leaf("logistics", "Logistics", (-1.5, -3, -1.5), ["Ethereum", "VeChain", "Hyperledger"], ["Project"]),
    ]

    center = _leaf("center", "Network Hub", (0, 0, 0), ["Ethereum", "Polygon", "Cosmos", "Polkadot", "Avalanche"], ["Project"],
                   "Central hub connecting the major infrastructure components.")
    center["expanded"] = True

    return {"center": center, "branches": [tokenized, staking, supply_chain]}


def build_sample_tree() -> Tree:
    """Build a fresh sample tree with family materials applied."""
    tree = tree_from_dict(sample_definition())
    apply_materials(tree.center, FAMILY_PRIMARY_COLORS["center"], 0)
    for branch in tree.branches:
        apply_materials(branch, FAMILY_PRIMARY_COLORS[branch.id], 1)
    return tree
