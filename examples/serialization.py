"""Serialization example for listmultimap.

Demonstrates:
- Pickle round-trips
- YAML in grouped and entries layouts
- Binary encoding with a custom element serializer
"""

import pickle

from listmultimap import (
    ByteOrder,
    CodecConfig,
    ImmutableListMultimap,
    MultimapSerializer,
    SerializationService,
    YamlLayout,
    dump_yaml,
    load_yaml,
)
from listmultimap.serialization import DataInput, DataOutput, Serializer


class Point:
    def __init__(self, x: float, y: float):
        self.x = x
        self.y = y

    def __eq__(self, other):
        return isinstance(other, Point) and (self.x, self.y) == (other.x, other.y)

    def __hash__(self):
        return hash((self.x, self.y))

    def __repr__(self):
        return f"Point({self.x}, {self.y})"


class PointSerializer(Serializer[Point]):
    @property
    def type_id(self) -> int:
        return 1000

    def write(self, output: DataOutput, obj: Point) -> None:
        output.write_double(obj.x)
        output.write_double(obj.y)

    def read(self, input: DataInput) -> Point:
        return Point(input.read_double(), input.read_double())


def pickle_example(multimap: ImmutableListMultimap) -> None:
    print("=== Pickle ===")
    restored = pickle.loads(pickle.dumps(multimap))
    print(f"Restored: {restored}, equal: {restored == multimap}")


def yaml_example(multimap: ImmutableListMultimap) -> None:
    print("\n=== YAML (grouped) ===")
    text = dump_yaml(multimap)
    print(text)
    print(f"Loaded back: {load_yaml(text)}")

    print("=== YAML (entries) ===")
    config = CodecConfig(yaml_layout=YamlLayout.ENTRIES)
    text = dump_yaml(multimap, config)
    print(text)
    print(f"Entry order kept: {list(load_yaml(text).entries()) == list(multimap.entries())}")


def binary_example() -> None:
    print("\n=== Binary with custom serializer ===")
    service = SerializationService({Point: PointSerializer()})
    serializer = MultimapSerializer(CodecConfig(byte_order=ByteOrder.BIG_ENDIAN), service)

    routes = ImmutableListMultimap.of(
        "north", Point(0.0, 1.0),
        "east", Point(1.0, 0.0),
        "north", Point(0.0, 2.0),
    )
    data = serializer.serialize(routes)
    print(f"Encoded {routes.size()} entries into {len(data)} bytes")
    print(f"Decoded: {serializer.deserialize(data)}")


def main():
    multimap = ImmutableListMultimap.of("foo", 1, "bar", 2, "foo", 3)
    pickle_example(multimap)
    yaml_example(multimap)
    binary_example()


if __name__ == "__main__":
    main()
