"""Example usage of the deepcompare engine."""

import json
from deepcompare import (
    CircularReferenceError,
    DeepCompareEngine,
    compare_arrays,
    compare_properties,
    compare_values_with_conflicts,
    compare_values_with_detailed_differences,
)

# Old API response (legacy system)
old_response = {
    "id": "INV-001",
    "total": 100.00,
    "status": "PAID",
    "updatedAt": "2025-02-02T11:00:00Z",  # Will be ignored
    "metadata": {"traceId": "abc123", "updatedAt": "2025-02-02T11:00:00Z"},
    "lineItems": [
        {"sku": "WIDGET-001", "quantity": 5, "unitPrice": 10.00},
        {"sku": "GADGET-002", "quantity": 2, "unitPrice": 25.50}
    ]
}

# New API response (new system)
new_response = {
    "id": "INV-001",
    "total": "100",  # Same value as a string
    "status": "paid",
    "updatedAt": "2025-02-03T08:00:00Z",
    "metadata": {"traceId": "def456", "updatedAt": "2025-02-03T08:00:00Z"},
    "lineItems": [
        {"sku": "WIDGET-001", "quantity": 6, "unitPrice": 10.00},  # Quantity changed
        {"sku": "GADGET-002", "quantity": 2, "unitPrice": 25.50}
    ],
    "currency": "EUR"  # New field
}


def main():
    print("=" * 60)
    print("deepcompare - Example")
    print("=" * 60)

    print("\nTop-level keys:")
    print(json.dumps(compare_properties(old_response, new_response).to_dict(), indent=2))

    options = {"path_filter": {"patterns": [".updatedAt", "metadata.traceId"], "mode": "exclude"}}

    print("\nConflicting paths (strict):")
    for path in compare_values_with_conflicts(old_response, new_response, "", options):
        print(f"  - {path}")

    print("\nDetailed differences:")
    for diff in compare_values_with_detailed_differences(old_response, new_response, "", options):
        print(f"  - [{diff.kind.value}] {diff.path}")
        print(f"    Old: {diff.old_value}")
        print(f"    New: {diff.new_value}")


def example_loose_comparison():
    """Example with type coercion enabled."""
    print("\n" + "=" * 60)
    print("Example with Loose Comparison")
    print("=" * 60)

    engine = DeepCompareEngine({
        "strict": False,
        "path_filter": {"patterns": [".updatedAt", "metadata", "currency"]},
    })
    print(f"\nConflicts: {engine.compare_values_with_conflicts(old_response, new_response)}")
    print(f"Arrays equal: {engine.compare_arrays(['42', True], [42, '1'])}")


def example_include_filter():
    """Example comparing only selected fields."""
    print("\n" + "=" * 60)
    print("Example with Include Filter")
    print("=" * 60)

    options = {"path_filter": {"patterns": ["lineItems[*].quantity"], "mode": "include"}}
    for diff in compare_values_with_detailed_differences(old_response, new_response, "", options):
        print(f"  - [{diff.kind.value}] {diff.path}: {diff.old_value} -> {diff.new_value}")


def example_with_cycles():
    """Example with self-referencing data."""
    print("\n" + "=" * 60)
    print("Example with Circular References")
    print("=" * 60)

    first = [1, 2]
    first.append(first)
    second = [1, 2]
    second.append(second)

    try:
        compare_arrays(first, second)
    except CircularReferenceError as e:
        print(f"\nError: {e}")

    print(f"With 'ignore': {compare_arrays(first, second, {'cycle_handling': 'ignore'})}")


if __name__ == "__main__":
    main()
    example_loose_comparison()
    example_include_filter()
    example_with_cycles()
