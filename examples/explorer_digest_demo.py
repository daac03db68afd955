#!/usr/bin/env python3
"""
Explorer Digest Example

This example demonstrates:
- Building the canonical string for an Explorer filter set
- Signing it with an API secret
- Showing that ordering and pagination parameters do not change the digest
"""

from altmetric_mcp.api_client import ExplorerClient
from altmetric_mcp.digest import canonical_string, compute_digest

SECRET = "this-is-a-valid-secret-key"


def demonstrate_digest():
    """Print canonical strings and digests for related filter sets."""
    print("Explorer Digest Example")
    print("=" * 40)

    filters = {"q": "climate", "type": ["article", "dataset"]}
    print(f"Filters:          {filters}")
    print(f"Canonical string: {canonical_string(filters)}")
    print(f"Digest:           {compute_digest(filters, SECRET)}")

    paged = {**filters, "order": "score_desc", "page[number]": 2}
    print(f"\nWith order and page: {compute_digest(paged, SECRET)}")

    reordered = {"type": ["article", "dataset"], "q": "climate"}
    print(f"Keys reordered:      {compute_digest(reordered, SECRET)}")

    client = ExplorerClient("demo-key", SECRET)
    print("\nQuery parameters sent to the Explorer API:")
    for name, value in client.build_query(paged):
        print(f"  {name} = {value}")


if __name__ == "__main__":
    demonstrate_digest()
