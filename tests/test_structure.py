"""
Tests for declaration, comment and identifier extraction.
"""

from pathlib import Path

import pytest

from conftest import decl_pairs
from guidelint.scanner import (
    CSHARP,
    JAVA,
    KOTLIN,
    SWIFT,
    DeclKind,
    LexerError,
    get_profile,
    profile_for_path,
    source_extensions,
)


SWIFT_SAMPLE = """\
/// A user account.
public class Account {
    static let maxRetries = 3
    private var balance: Int = 0

    /// Deposits money.
    public func deposit(amount: Int) {
        let newBalance = balance + amount
        balance = newBalance
    }
}

enum Direction {
    case north, south
    case east
}
"""

KOTLIN_SAMPLE = """\
package com.example

const val MAX_COUNT = 10

data class User(val name: String, val age: Int)

enum class Color { RED, GREEN }

fun String.shout(): String = uppercase()

object Registry {
    fun <T> register(item: T) {}
}
"""

JAVA_SAMPLE = """\
package com.example;

import java.util.List;

/** Holds orders. */
public class OrderBook {
    public static final int MAX_ORDERS = 100;
    private final List<String> orders = new ArrayList<>();
    private int count;

    public OrderBook() {
        count = 0;
    }

    /** Adds an order. */
    public void addOrder(String order) {
        int size = orders.size();
        orders.add(order);
    }

    enum Side { BUY, SELL }
}
"""

CSHARP_SAMPLE = """\
namespace Shop
{
    public class Cart
    {
        private const int MaxItems = 50;
        private int itemCount;

        public string Owner { get; set; }

        public void AddItem(string name)
        {
            var total = itemCount + 1;
        }
    }
}
"""


class TestLanguageProfiles:
    """Profile lookup."""

    def test_profile_for_path(self):
        """Profiles resolve from file extensions, case-insensitively."""
        assert profile_for_path(Path("A.swift")) is SWIFT
        assert profile_for_path(Path("build.gradle.kts")) is KOTLIN
        assert profile_for_path(Path("Main.JAVA")) is JAVA
        assert profile_for_path(Path("Cart.cs")) is CSHARP
        assert profile_for_path(Path("notes.txt")) is None

    def test_get_profile_by_alias(self):
        """Fence aliases resolve to profiles."""
        assert get_profile("Kotlin") is KOTLIN
        assert get_profile("kt") is KOTLIN
        assert get_profile("c#") is CSHARP

    def test_get_profile_unknown(self):
        """Unknown language names raise KeyError."""
        with pytest.raises(KeyError):
            get_profile("cobol")

    def test_source_extensions(self):
        """Every profile contributes its extensions."""
        assert {".swift", ".kt", ".java", ".cs"} <= source_extensions()


class TestSwiftStructure:
    """Swift declarations."""

    def test_declarations(self, scan):
        """Swift sample yields types, members, locals and enum cases in order."""
        unit = scan(SWIFT_SAMPLE, SWIFT)
        assert decl_pairs(unit) == [
            ("type", "Account"),
            ("constant", "maxRetries"),
            ("variable", "balance"),
            ("function", "deposit"),
            ("variable", "newBalance"),
            ("type", "Direction"),
            ("enum_case", "north"),
            ("enum_case", "south"),
            ("enum_case", "east"),
        ]
        assert not unit.unbalanced_braces

    def test_doc_comments_attach(self, scan):
        """Doc comments attach to the declaration that follows them."""
        unit = scan(SWIFT_SAMPLE, SWIFT)
        by_name = {d.name: d for d in unit.declarations}
        assert by_name["Account"].doc_comment == "A user account."
        assert by_name["deposit"].doc_comment == "Deposits money."
        assert by_name["balance"].doc_comment is None

    def test_modifiers_and_containers(self, scan):
        """Visibility, container and depth are tracked per declaration."""
        unit = scan(SWIFT_SAMPLE, SWIFT)
        by_name = {d.name: d for d in unit.declarations}
        assert by_name["Account"].visibility == "public"
        assert by_name["Account"].is_top_level
        assert by_name["balance"].visibility == "private"
        assert by_name["balance"].container == "Account"
        assert by_name["newBalance"].container == "Account"
        assert by_name["newBalance"].depth == 2
        assert by_name["north"].container == "Direction"

    def test_positions(self, scan):
        """Declarations carry the name's line and column."""
        unit = scan(SWIFT_SAMPLE, SWIFT)
        account = unit.declarations[0]
        assert (account.line, account.column) == (2, 14)

    def test_parameters_are_not_declarations(self, scan):
        """Function parameters are identifiers only."""
        unit = scan("func greet(name: String) {}\n", SWIFT)
        assert decl_pairs(unit) == [("function", "greet")]
        assert "name" in [i.name for i in unit.identifiers]

    def test_class_func_is_a_modifier(self, scan):
        """`class func` declares a function, not a type."""
        unit = scan("class Factory {\n    class func make() {}\n}\n", SWIFT)
        assert decl_pairs(unit) == [("type", "Factory"), ("function", "make")]
        assert unit.declarations[1].modifiers == ("class",)

    def test_extension_is_not_a_type_declaration(self, scan):
        """An extension names its container but declares nothing."""
        unit = scan("extension String {\n    func trimmed() {}\n}\n", SWIFT)
        assert decl_pairs(unit) == [("function", "trimmed")]
        assert unit.declarations[0].container == "String"

    def test_doc_comment_used_once(self, scan):
        """A doc comment is consumed by the first declaration."""
        unit = scan("/// Orphan doc\nlet a = 1\nlet b = 2\n", SWIFT)
        assert unit.declarations[0].doc_comment == "Orphan doc"
        assert unit.declarations[1].doc_comment is None

    def test_modifiers_end_at_other_keywords(self, scan):
        """A modifier on `typealias` does not carry over to the next function."""
        unit = scan("public typealias Handler = () -> Void\nfunc helper() {}\n", SWIFT)
        assert decl_pairs(unit) == [("function", "helper")]
        assert unit.declarations[0].modifiers == ()

    def test_protocol_init_resets_doc_and_modifiers(self, scan):
        """Doc and modifiers of a protocol `init` stay with the `init`."""
        source = "public protocol Store {\n    /// Makes one.\n    public init()\n    func load()\n}\n"
        unit = scan(source, SWIFT)
        load = unit.declarations[-1]
        assert load.name == "load"
        assert load.modifiers == ()
        assert load.doc_comment is None

    def test_enum_raw_values(self, scan):
        """Raw values of any length do not hide the cases after them."""
        source = "enum Level: Int {\n    case low = -1, mid, high = 10\n    case top\n}\n"
        unit = scan(source, SWIFT)
        assert [d.name for d in unit.declarations_of(DeclKind.ENUM_CASE)] == [
            "low", "mid", "high", "top",
        ]


class TestKotlinStructure:
    """Kotlin declarations."""

    def test_declarations(self, scan):
        """Kotlin constants, data classes, enum classes and objects."""
        unit = scan(KOTLIN_SAMPLE, KOTLIN)
        assert decl_pairs(unit) == [
            ("constant", "MAX_COUNT"),
            ("type", "User"),
            ("type", "Color"),
            ("enum_case", "RED"),
            ("enum_case", "GREEN"),
            ("function", "shout"),
            ("type", "Registry"),
            ("function", "register"),
        ]

    def test_extension_function_receiver(self, scan):
        """The receiver type is not the function name."""
        unit = scan(KOTLIN_SAMPLE, KOTLIN)
        assert "String" not in [d.name for d in unit.declarations]

    def test_enum_modifier(self, scan):
        """`enum class` keeps `enum` as a modifier."""
        unit = scan(KOTLIN_SAMPLE, KOTLIN)
        color = [d for d in unit.declarations if d.name == "Color"][0]
        assert color.modifiers == ("enum",)


class TestJavaStructure:
    """Java declarations recognized by shape."""

    def test_declarations(self, scan):
        """Java members are found from `Type name` shapes."""
        unit = scan(JAVA_SAMPLE, JAVA)
        assert decl_pairs(unit) == [
            ("type", "OrderBook"),
            ("constant", "MAX_ORDERS"),
            ("variable", "orders"),
            ("variable", "count"),
            ("function", "addOrder"),
            ("variable", "size"),
            ("type", "Side"),
            ("enum_case", "BUY"),
            ("enum_case", "SELL"),
        ]

    def test_javadoc_attaches(self, scan):
        """Javadoc attaches to classes and methods."""
        unit = scan(JAVA_SAMPLE, JAVA)
        by_name = {d.name: d for d in unit.declarations}
        assert by_name["OrderBook"].doc_comment == "Holds orders."
        assert by_name["addOrder"].doc_comment == "Adds an order."

    def test_generic_method(self, scan):
        """Type parameters before the return type are skipped."""
        unit = scan("class A { public <T> T pick(T value) { return value; } }\n", JAVA)
        assert decl_pairs(unit) == [("type", "A"), ("function", "pick")]

    def test_class_literal_is_not_a_type(self, scan):
        """`Foo.class` is a member access."""
        unit = scan("Object o = Foo.class;\n", JAVA)
        assert decl_pairs(unit) == [("variable", "o")]

    def test_comparison_is_not_a_declaration(self, scan):
        """A name after `>` in an expression is a use, not a variable."""
        source = "class A {\n    boolean over(int count) {\n        return count > MAX;\n    }\n}\n"
        unit = scan(source, JAVA)
        assert decl_pairs(unit) == [("type", "A"), ("function", "over")]
        assert "MAX" in [i.name for i in unit.identifiers]

    def test_nested_generic_field(self, scan):
        """Nested generic arguments still end a field type."""
        unit = scan("class A {\n    Map<String, List<Integer>> index = null;\n}\n", JAVA)
        assert decl_pairs(unit) == [("type", "A"), ("variable", "index")]


class TestCSharpStructure:
    """C# declarations, including properties."""

    def test_declarations(self, scan):
        """C# constants, fields, properties and methods."""
        unit = scan(CSHARP_SAMPLE, CSHARP)
        assert decl_pairs(unit) == [
            ("type", "Cart"),
            ("constant", "MaxItems"),
            ("variable", "itemCount"),
            ("property", "Owner"),
            ("function", "AddItem"),
            ("variable", "total"),
        ]

    def test_types_in_namespace_are_top_level(self, scan):
        """A namespace block does not nest its types."""
        unit = scan(CSHARP_SAMPLE, CSHARP)
        assert unit.declarations[0].is_top_level
        assert unit.declarations[0].depth == 1

    def test_declarations_of(self, scan):
        """declarations_of filters by kind."""
        unit = scan(CSHARP_SAMPLE, CSHARP)
        assert [d.name for d in unit.declarations_of(DeclKind.PROPERTY)] == ["Owner"]

    def test_null_coalescing_is_not_a_declaration(self, scan):
        """`a ?? Name` reads Name; it does not declare it."""
        source = (
            "class Foo\n{\n    string Get(string input)\n    {\n"
            "        return input ?? DefaultName;\n    }\n}\n"
        )
        unit = scan(source, CSHARP)
        assert decl_pairs(unit) == [("type", "Foo"), ("function", "Get")]

    def test_conditional_is_not_a_declaration(self, scan):
        """Names in a `?:` expression are not declared."""
        source = "class Foo\n{\n    int Pick(bool flag)\n    {\n        return flag ? Low : High;\n    }\n}\n"
        unit = scan(source, CSHARP)
        assert decl_pairs(unit) == [("type", "Foo"), ("function", "Pick")]

    def test_nullable_field(self, scan):
        """A nullable type still declares its field."""
        unit = scan("class Foo\n{\n    private int? count;\n}\n", CSHARP)
        assert decl_pairs(unit) == [("type", "Foo"), ("variable", "count")]
        assert unit.declarations[1].visibility == "private"


class TestCommentsAndLines:
    """Comment extraction and line accounting."""

    def test_comment_line_counts(self, scan):
        """Line and block comments count every line they span."""
        unit = scan("// a\nlet x = 1 // b\n/* c\n d */\n", SWIFT)
        assert unit.code_lines == {2}
        assert unit.comment_line_count == 4
        assert unit.comment_density == 4.0

    def test_empty_source_density(self, scan):
        """Empty input has zero density."""
        assert scan("", SWIFT).comment_density == 0.0

    def test_comment_body(self, scan):
        """Doc markers and leading asterisks are stripped from the body."""
        unit = scan("/**\n * First line.\n * Second line.\n */\nclass A {}\n", SWIFT)
        comment = unit.comments[0]
        assert comment.is_doc and comment.is_block
        assert comment.body == "First line.\nSecond line."

    def test_get_line(self, scan):
        """get_line is 1-based and empty out of range."""
        unit = scan("let a = 1\nlet b = 2\n", SWIFT)
        assert unit.get_line(2) == "let b = 2"
        assert unit.get_line(0) == ""
        assert unit.get_line(99) == ""

    def test_unclosed_brace(self, scan):
        """A missing `}` is reported."""
        assert scan("class A {\n", SWIFT).unbalanced_braces

    def test_extra_closing_brace(self, scan):
        """A stray `}` is reported."""
        assert scan("}\n", SWIFT).unbalanced_braces

    def test_lexer_error_propagates(self, scan):
        """Lexer errors surface to the caller."""
        with pytest.raises(LexerError):
            scan('let s = "open\n', SWIFT)
