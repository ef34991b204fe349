"""Unit tests for Pydantic schema introspection."""

from __future__ import annotations

import enum
import sys
from typing import Annotated, ClassVar, Dict, List, Optional, Tuple, Union

import pytest
from pydantic import BaseModel, create_model

from compactkeys import (
    BaseMessage,
    EnumSchema,
    FieldSchema,
    Schema,
    SchemaError,
    StructSchema,
    Tagged,
    VariantSchema,
    compact,
    rewrite_schema,
    schema_from_type,
)
from compactkeys.schema.introspect import (
    LEAF,
    EnumShape,
    MappingShape,
    ModelShape,
    OptionalShape,
    SequenceShape,
    TupleShape,
    shape_of,
)


class Color(enum.Enum):
    """Plain enums are leaf values, not compactable enums."""

    RED = "red"
    BLUE = "blue"


class Circle(BaseMessage):
    radius: float


class Square(BaseMessage):
    side: float


class Canvas(BaseMessage):
    title: str
    color: Color
    main: Union[Circle, Square]
    extras: List[Circle] = []
    lookup: Dict[str, Square] = {}
    maybe: Optional[Circle] = None


class Renamed(BaseMessage):
    value: int

    compact_tag: ClassVar[Optional[str]] = "R"


class PlainModel(BaseModel):
    """Any Pydantic model can be compacted."""

    count: int


class TreeNode(BaseMessage):
    label: str
    children: List[TreeNode] = []


def diamond_chain(depth: int) -> type[BaseMessage]:
    """Build M<depth>, where each M<i> holds M<i-1> in two fields."""
    model = create_model("M0", __base__=BaseMessage, x=(int, ...))
    for i in range(1, depth + 1):
        model = create_model(f"M{i}", __base__=BaseMessage, a=(model, ...), b=(model, ...))
    return model


class TestShapeOf:
    """Test annotation classification."""

    def test_leaves(self) -> None:
        assert shape_of(int) is LEAF
        assert shape_of(Color) is LEAF
        assert shape_of(List[int]) is LEAF
        assert shape_of(Dict[str, int]) is LEAF
        assert shape_of(Optional[str]) is LEAF
        assert shape_of(Union[int, str]) is LEAF
        assert shape_of(Tuple[int, str]) is LEAF

    def test_model(self) -> None:
        assert shape_of(Circle) == ModelShape(Circle)

    def test_union_is_enum(self) -> None:
        shape = shape_of(Union[Circle, Square])
        assert shape == EnumShape("Circle|Square", (Circle, Square))

    def test_pipe_union(self) -> None:
        assert shape_of(Circle | Square) == shape_of(Union[Circle, Square])

    def test_tagged_single_variant(self) -> None:
        shape = shape_of(Annotated[Circle, Tagged("Shape")])
        assert shape == EnumShape("Shape", (Circle,))

    def test_optional_enum(self) -> None:
        assert shape_of(Optional[Union[Circle, Square]]) == OptionalShape(
            EnumShape("Circle|Square", (Circle, Square))
        )
        assert shape_of(Annotated[Optional[Circle], Tagged()]) == OptionalShape(
            EnumShape("Circle", (Circle,))
        )

    def test_containers(self) -> None:
        assert shape_of(List[Circle]) == SequenceShape(ModelShape(Circle), list)
        assert shape_of(Tuple[Circle, ...]) == SequenceShape(ModelShape(Circle), tuple)
        assert shape_of(Dict[str, Circle]) == MappingShape(ModelShape(Circle))
        assert shape_of(Tuple[int, Circle]) == TupleShape((LEAF, ModelShape(Circle)))

    def test_mixed_union_rejected(self) -> None:
        with pytest.raises(SchemaError, match="cannot mix"):
            shape_of(Union[Circle, int])

    def test_tagged_non_model_rejected(self) -> None:
        with pytest.raises(SchemaError, match="must be Pydantic models"):
            shape_of(Annotated[int, Tagged("Bad")])

    def test_variant_for_tag(self) -> None:
        shape = shape_of(Union[Renamed, Circle])
        assert isinstance(shape, EnumShape)
        assert shape.variant_for_tag("R") is Renamed
        assert shape.variant_for_tag("Renamed") is None


class TestSchemaFromType:
    """Test building Schema descriptions from models."""

    def test_struct(self) -> None:
        assert schema_from_type(Circle) == Schema(
            (StructSchema("Circle", (FieldSchema("radius"),)),)
        )

    def test_plain_pydantic_model(self) -> None:
        assert schema_from_type(PlainModel) == Schema(
            (StructSchema("PlainModel", (FieldSchema("count"),)),)
        )

    def test_enum(self) -> None:
        schema = schema_from_type(Annotated[Union[Circle, Square], Tagged("Shape")])
        assert schema == Schema(
            (
                EnumSchema(
                    "Shape",
                    (
                        VariantSchema("Circle", (FieldSchema("radius"),)),
                        VariantSchema("Square", (FieldSchema("side"),)),
                    ),
                ),
            )
        )

    def test_name_override(self) -> None:
        schema = schema_from_type(Union[Circle, Square], name="Shape")
        assert schema.types[0].name == "Shape"

    def test_compact_tag(self) -> None:
        schema = schema_from_type(Union[Renamed, Circle])
        node = schema.types[0]
        assert isinstance(node, EnumSchema)
        assert [v.name for v in node.variants] == ["R", "Circle"]

    def test_nested_fields(self) -> None:
        schema = schema_from_type(Canvas)
        node = schema.types[0]
        assert isinstance(node, StructSchema)
        fields = {f.name: f for f in node.fields}

        assert fields["title"].nested is None
        assert fields["color"].nested is None

        main = fields["main"].nested
        assert main is not None
        assert isinstance(main.types[0], EnumSchema)
        assert [v.name for v in main.types[0].variants] == ["Circle", "Square"]

        assert fields["extras"].nested == Schema(
            (StructSchema("Circle", (FieldSchema("radius"),)),)
        )
        assert fields["lookup"].nested == Schema(
            (StructSchema("Square", (FieldSchema("side"),)),)
        )
        assert fields["maybe"].nested is not None

    def test_recursive_model(self) -> None:
        """Test a self-referencing model produces a finite schema."""
        schema = schema_from_type(TreeNode)
        assert schema == Schema(
            (StructSchema("TreeNode", (FieldSchema("label"), FieldSchema("children"))),)
        )

    def test_shared_model_built_once(self) -> None:
        """Test a model reached along many paths is expanded only once."""
        schema = schema_from_type(diamond_chain(40))
        a, b = schema.types[0].fields
        assert a.nested.types[0].fields is b.nested.types[0].fields

        table = compact(schema)
        assert table.to_dict() == {"a": "a", "b": "b", "x": "c"}

        rewritten = rewrite_schema(schema, table)
        ra, rb = rewritten.types[0].fields
        assert ra.nested.types[0].fields is rb.nested.types[0].fields

    @pytest.mark.skipif(sys.version_info < (3, 12), reason="type statement needs Python 3.12")
    def test_type_alias(self) -> None:
        namespace: Dict[str, object] = {"Circle": Circle, "Square": Square}
        exec("type Figure = Circle | Square\ntype Main = Figure", namespace)
        figure, main = namespace["Figure"], namespace["Main"]

        assert shape_of(figure) == shape_of(Union[Circle, Square])
        assert shape_of(main) == shape_of(Union[Circle, Square])
        assert shape_of(list[figure]) == SequenceShape(shape_of(Union[Circle, Square]), list)

        board = create_model("Board", __base__=BaseMessage, main=(main, ...))
        field = schema_from_type(board).types[0].fields[0]
        assert [v.name for v in field.nested.types[0].variants] == ["Circle", "Square"]

    def test_not_compactable(self) -> None:
        with pytest.raises(SchemaError, match="Cannot compact"):
            schema_from_type(int)
        with pytest.raises(SchemaError, match="Cannot compact"):
            schema_from_type(List[Circle])
