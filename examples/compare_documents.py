"""
Example: comparing two API responses whose arrays come back in different orders.

Run this with:
    python examples/compare_documents.py

The same comparison from the command line:
    canondiff compare left.json right.json --rules-file rules.json
"""

from canondiff import compare_values, make_rule
from canondiff.core.types import ChunkType, LineType


def main() -> None:
    rules = [
        make_rule(
            "Bookings",
            ["bookings[].relationships.resource.id", "bookings[].attributes.date"],
            description="Order bookings by resource, then date",
        ),
        make_rule("ID Field", ["id"]),
    ]

    left = {
        "bookings": [
            {"attributes": {"date": "2024-05-02"}, "relationships": {"resource": {"id": "r2"}}},
            {"attributes": {"date": "2024-05-01"}, "relationships": {"resource": {"id": "r1"}}},
        ],
        "users": [{"id": 2, "name": "Bo"}, {"id": 1, "name": "Al"}],
    }
    right = {
        "users": [{"name": "Al", "id": 1}, {"name": "Bo", "id": 2}],
        "bookings": [
            {"relationships": {"resource": {"id": "r1"}}, "attributes": {"date": "2024-05-01"}},
            {"relationships": {"resource": {"id": "r2"}}, "attributes": {"date": "2024-05-03"}},
        ],
    }

    result = compare_values(left, right, rules)
    print(f"Identical: {result.identical}")
    print(f"Removed: {result.removed_count}, added: {result.added_count}")

    for c in result.chunks:
        if c.type != ChunkType.CHANGE:
            print(f"... {len(c)} unchanged lines ...")
            continue
        for row in c.rows:
            if row.left.type == LineType.REMOVED:
                print(f"- {row.left.content}")
            if row.right.type == LineType.ADDED:
                print(f"+ {row.right.content}")
            if not row.changed:
                print(f"  {row.left.content}")


if __name__ == "__main__":
    main()
