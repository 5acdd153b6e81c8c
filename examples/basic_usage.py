"""Basic usage example for listmultimap.

This example demonstrates how to:
- Build a multimap with the builder and with ``of``
- Read values, keys and entries
- Compare multimaps by content
"""

from listmultimap import ImmutableListMultimap


def main():
    # Build with the builder
    builder = ImmutableListMultimap.builder()
    builder.put("foo", 1)
    builder.put("bar", 2)
    builder.put_values("foo", 3, 4)
    multimap = builder.build()

    print(f"Multimap: {multimap}")
    print(f"Size: {multimap.size()}")

    # Lookups
    print(f"foo -> {multimap.get('foo')}")
    print(f"missing -> {multimap.get('missing')}")
    print(f"Contains entry ('bar', 2): {multimap.contains_entry('bar', 2)}")

    # Views
    print("\nEntries in insertion order:")
    for key, value in multimap.entries():
        print(f"  {key} = {value}")

    print(f"Distinct keys: {list(multimap.key_set())}")
    print(f"Key counts: {dict(multimap.keys().counts())}")
    print(f"As map: {dict(multimap.as_map())}")

    # Equality ignores cross-key interleaving
    same = ImmutableListMultimap.of("bar", 2, "foo", 1, "foo", 3, "foo", 4)
    print(f"\nEqual to regrouped copy: {multimap == same}")
    print(f"Same hash: {hash(multimap) == hash(same)}")

    # Builders stay usable after build()
    builder.put("baz", 5)
    print(f"Original unchanged: {multimap.size()}, new build: {builder.build().size()}")


if __name__ == "__main__":
    main()
