from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from scenario_content.tools.content_tools import tool_decode_slug, tool_encode_slug, tool_generate_content


def main():
    inputs = {
        "initial_amount": "10000",
        "monthly_contribution": "500",
        "annual_return": "7",
        "time_horizon": "20",
    }
    enc = tool_encode_slug(inputs)
    print("Slug:", enc["slug"])
    print("Goal:", enc["goal"])
    print("Name:", enc["metadata"]["name"])

    dec = tool_decode_slug(enc["slug"])
    print("Decoded:", dec["initial_amount"], dec["monthly_contribution"], dec["annual_return"], dec["time_horizon"])
    print("Goal consistent:", dec["goal_consistent"])

    for locale in ("en", "es", "pl", "fr"):
        out = tool_generate_content({"inputs": inputs, "locale": locale})
        print(f"[{locale}]", out["investment_overview"].splitlines()[0], "...")
    print("Market data:", out["market_data"])


if __name__ == "__main__":
    main()
