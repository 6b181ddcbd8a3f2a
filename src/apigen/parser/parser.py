"""SDL Recursive-Descent Parser.

Converts a flat list of ``Token`` objects into a tuple of immutable
definition nodes.

The parser skips COMMENT tokens transparently, so the grammar rules are
stated in terms of meaningful tokens only.

Error recovery
--------------
When an unexpected token is encountered the parser records a
``ParseError`` and synchronizes by consuming tokens until it reaches a
definition keyword (``type``, ``enum``, ...) outside of any brackets,
then continues with that definition.  A single run can therefore
surface multiple independent errors; they are raised together as a
``ParseErrorCollection`` once the whole document has been read.

Supported definitions::

    schema     schema @dir { query: Query mutation: Mutation }
    scalar     scalar DateTime @dir
    type       type User implements Node & Entity @dir { field(arg: T = v): T! @dir }
    interface  interface Node implements Entity @dir { id: ID! }
    union      union Result @dir = | User | Post
    enum       enum Role @dir { ADMIN @dir USER }
    input      input Filter @dir { term: String = "x" @dir }
    directive  directive @java(package: String) repeatable on OBJECT | ENUM

Type extensions and executable definitions (queries, fragments) are
rejected.
"""
from __future__ import annotations

from apigen.ast.nodes import (
    Argument,
    BooleanValue,
    Definition,
    Directive,
    DirectiveDefinition,
    EnumTypeDefinition,
    EnumValue,
    EnumValueDefinition,
    FieldDefinition,
    FloatValue,
    InputObjectTypeDefinition,
    InputValueDefinition,
    InterfaceTypeDefinition,
    IntValue,
    ListType,
    ListValue,
    NamedType,
    NonNullType,
    NullValue,
    ObjectField,
    ObjectTypeDefinition,
    ObjectValue,
    OperationTypeDefinition,
    ScalarTypeDefinition,
    SchemaDefinition,
    Span,
    StringValue,
    TypeRef,
    UnionTypeDefinition,
    Value,
)
from apigen.grammar.tokens import DEFINITION_KEYWORDS, Token, TokenType
from apigen.lexer.lexer import tokenize
from apigen.parser.errors import ParseError, ParseErrorCollection

_OPENERS = frozenset({TokenType.LBRACE, TokenType.LPAREN, TokenType.LBRACKET})
_CLOSERS = frozenset({TokenType.RBRACE, TokenType.RPAREN, TokenType.RBRACKET})
_EXECUTABLE_KEYWORDS = frozenset({"query", "mutation", "subscription", "fragment"})


class Parser:
    """Recursive descent parser that produces definitions from tokens.

    Parameters
    ----------
    tokens:
        The flat token list produced by the lexer.  Must include the
        terminal ``EOF`` token.
    source:
        Locator of the schema resource, attached to every error.
    """

    def __init__(self, tokens: list[Token], source: str | None = None) -> None:
        self._tokens: list[Token] = [t for t in tokens if t.type is not TokenType.COMMENT]
        self._source: str | None = source
        self._pos: int = 0
        self._depth: int = 0
        self._previous: Token = self._tokens[0]
        self._errors: list[ParseError] = []

    # ------------------------------------------------------------------
    # Navigation helpers
    # ------------------------------------------------------------------

    def _current(self) -> Token:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return self._tokens[-1]  # EOF

    def _peek(self, offset: int = 1) -> Token:
        idx = self._pos + offset
        if idx < len(self._tokens):
            return self._tokens[idx]
        return self._tokens[-1]

    def _advance(self) -> Token:
        """Consume and return the current token, tracking bracket depth."""
        tok = self._current()
        if tok.type is not TokenType.EOF:
            self._pos += 1
            if tok.type in _OPENERS:
                self._depth += 1
            elif tok.type in _CLOSERS and self._depth > 0:
                self._depth -= 1
        self._previous = tok
        return tok

    def _check(self, *types: TokenType) -> bool:
        return self._current().type in types

    def _match(self, *types: TokenType) -> Token | None:
        if self._check(*types):
            return self._advance()
        return None

    def _expect(self, token_type: TokenType, message: str | None = None) -> Token:
        """Consume the current token if it matches, else raise ``ParseError``."""
        if self._check(token_type):
            return self._advance()
        raise self._error(message or f"Expected {token_type.name}", (token_type,))

    def _expect_keyword(self, keyword: str) -> Token:
        if self._current().is_name(keyword):
            return self._advance()
        raise self._error(f"Expected {keyword!r}", (TokenType.NAME,))

    def _error(self, message: str, expected: tuple[TokenType, ...] = ()) -> ParseError:
        return ParseError(message, self._source, self._current(), expected)

    def _span_from(self, start_tok: Token) -> Span:
        """Build a ``Span`` from ``start_tok`` to the last consumed token."""
        return Span(
            start=start_tok.offset,
            end=max(self._previous.end, start_tok.end),
            line=start_tok.line,
            col=start_tok.col,
        )

    def _synchronize(self) -> None:
        """Skip tokens until the next top-level definition keyword."""
        self._advance()
        while not self._check(TokenType.EOF):
            tok = self._current()
            if self._depth == 0 and tok.type is TokenType.NAME and tok.value in DEFINITION_KEYWORDS:
                return
            self._advance()

    # ------------------------------------------------------------------
    # Document
    # ------------------------------------------------------------------

    def parse(self) -> tuple[Definition, ...]:
        """Parse the token stream and return every definition in order.

        Raises
        ------
        ParseErrorCollection
            If any errors were recorded during parsing.
        """
        definitions: list[Definition] = []
        while not self._check(TokenType.EOF):
            try:
                definitions.append(self._parse_definition())
            except ParseError as exc:
                self._errors.append(exc)
                self._synchronize()
        if self._errors:
            raise ParseErrorCollection(self._errors)
        return tuple(definitions)

    def _parse_definition(self) -> Definition:
        start_tok = self._current()
        description = self._parse_description()
        keyword = self._current()
        if keyword.type is not TokenType.NAME:
            raise self._error(
                f"Expected a type system definition, got {keyword.type.name} {keyword.value!r}",
                (TokenType.NAME,),
            )
        if keyword.value == "schema":
            return self._parse_schema(start_tok, description)
        if keyword.value == "scalar":
            return self._parse_scalar(start_tok, description)
        if keyword.value == "type":
            return self._parse_object(start_tok, description)
        if keyword.value == "interface":
            return self._parse_interface(start_tok, description)
        if keyword.value == "union":
            return self._parse_union(start_tok, description)
        if keyword.value == "enum":
            return self._parse_enum(start_tok, description)
        if keyword.value == "input":
            return self._parse_input(start_tok, description)
        if keyword.value == "directive":
            return self._parse_directive_definition(start_tok, description)
        if keyword.value == "extend":
            error = self._error("Type extensions are not supported")
            self._advance()  # 'extend'
            self._match(TokenType.NAME)  # the extended kind, so recovery skips the body
            raise error
        if keyword.value in _EXECUTABLE_KEYWORDS:
            raise self._error("Executable definitions are not allowed in a schema")
        raise self._error(f"Unknown definition keyword {keyword.value!r}", (TokenType.NAME,))

    def _parse_description(self) -> str | None:
        tok = self._current()
        if tok.is_string:
            self._advance()
            return tok.value
        return None

    def _parse_name(self, what: str) -> Token:
        return self._expect(TokenType.NAME, f"Expected {what} name")

    # ------------------------------------------------------------------
    # Definition parsers
    # ------------------------------------------------------------------

    def _parse_schema(self, start_tok: Token, description: str | None) -> SchemaDefinition:
        """Parse: ``schema directives? '{' (operation ':' NamedType)+ '}'``"""
        self._advance()  # 'schema'
        directives = self._parse_directives()
        self._expect(TokenType.LBRACE, "Expected '{' after 'schema'")
        operations: list[OperationTypeDefinition] = []
        while not self._match(TokenType.RBRACE):
            op_tok = self._current()
            if not op_tok.is_name("query", "mutation", "subscription"):
                raise self._error("Expected 'query', 'mutation' or 'subscription'", (TokenType.NAME,))
            self._advance()
            self._expect(TokenType.COLON, "Expected ':' after operation type")
            named = self._parse_named_type()
            operations.append(
                OperationTypeDefinition(operation=op_tok.value, type=named, span=self._span_from(op_tok))
            )
        if not operations:
            raise self._error("Schema definition must declare at least one operation type")
        return SchemaDefinition(
            operation_types=tuple(operations),
            directives=directives,
            description=description,
            span=self._span_from(start_tok),
        )

    def _parse_scalar(self, start_tok: Token, description: str | None) -> ScalarTypeDefinition:
        self._advance()  # 'scalar'
        name_tok = self._parse_name("scalar")
        directives = self._parse_directives()
        return ScalarTypeDefinition(
            name=name_tok.value,
            directives=directives,
            description=description,
            span=self._span_from(start_tok),
        )

    def _parse_object(self, start_tok: Token, description: str | None) -> ObjectTypeDefinition:
        """Parse: ``type Name implements? directives? fields?``"""
        self._advance()  # 'type'
        name_tok = self._parse_name("type")
        interfaces = self._parse_implements()
        directives = self._parse_directives()
        fields = self._parse_fields_definition()
        return ObjectTypeDefinition(
            name=name_tok.value,
            interfaces=interfaces,
            fields=fields,
            directives=directives,
            description=description,
            span=self._span_from(start_tok),
        )

    def _parse_interface(self, start_tok: Token, description: str | None) -> InterfaceTypeDefinition:
        self._advance()  # 'interface'
        name_tok = self._parse_name("interface")
        interfaces = self._parse_implements()
        directives = self._parse_directives()
        fields = self._parse_fields_definition()
        return InterfaceTypeDefinition(
            name=name_tok.value,
            interfaces=interfaces,
            fields=fields,
            directives=directives,
            description=description,
            span=self._span_from(start_tok),
        )

    def _parse_union(self, start_tok: Token, description: str | None) -> UnionTypeDefinition:
        """Parse: ``union Name directives? ('=' '|'? NamedType ('|' NamedType)*)?``"""
        self._advance()  # 'union'
        name_tok = self._parse_name("union")
        directives = self._parse_directives()
        members: list[NamedType] = []
        if self._match(TokenType.EQUALS):
            self._match(TokenType.PIPE)
            members.append(self._parse_named_type())
            while self._match(TokenType.PIPE):
                members.append(self._parse_named_type())
        return UnionTypeDefinition(
            name=name_tok.value,
            members=tuple(members),
            directives=directives,
            description=description,
            span=self._span_from(start_tok),
        )

    def _parse_enum(self, start_tok: Token, description: str | None) -> EnumTypeDefinition:
        self._advance()  # 'enum'
        name_tok = self._parse_name("enum")
        directives = self._parse_directives()
        values: list[EnumValueDefinition] = []
        if self._match(TokenType.LBRACE):
            while not self._match(TokenType.RBRACE):
                value_start = self._current()
                value_description = self._parse_description()
                value_tok = self._parse_name("enum value")
                if value_tok.value in ("true", "false", "null"):
                    raise ParseError(
                        f"{value_tok.value!r} cannot be used as an enum value",
                        self._source,
                        value_tok,
                    )
                values.append(
                    EnumValueDefinition(
                        name=value_tok.value,
                        directives=self._parse_directives(),
                        description=value_description,
                        span=self._span_from(value_start),
                    )
                )
        return EnumTypeDefinition(
            name=name_tok.value,
            values=tuple(values),
            directives=directives,
            description=description,
            span=self._span_from(start_tok),
        )

    def _parse_input(self, start_tok: Token, description: str | None) -> InputObjectTypeDefinition:
        self._advance()  # 'input'
        name_tok = self._parse_name("input")
        directives = self._parse_directives()
        fields: list[InputValueDefinition] = []
        if self._match(TokenType.LBRACE):
            while not self._match(TokenType.RBRACE):
                fields.append(self._parse_input_value())
        return InputObjectTypeDefinition(
            name=name_tok.value,
            fields=tuple(fields),
            directives=directives,
            description=description,
            span=self._span_from(start_tok),
        )

    def _parse_directive_definition(
        self, start_tok: Token, description: str | None
    ) -> DirectiveDefinition:
        """Parse: ``directive '@' Name args? 'repeatable'? 'on' '|'? Loc ('|' Loc)*``"""
        self._advance()  # 'directive'
        self._expect(TokenType.AT, "Expected '@' before directive name")
        name_tok = self._parse_name("directive")
        arguments = self._parse_arguments_definition()
        repeatable = False
        if self._current().is_name("repeatable"):
            self._advance()
            repeatable = True
        self._expect_keyword("on")
        self._match(TokenType.PIPE)
        locations = [self._parse_name("directive location").value]
        while self._match(TokenType.PIPE):
            locations.append(self._parse_name("directive location").value)
        return DirectiveDefinition(
            name=name_tok.value,
            arguments=arguments,
            repeatable=repeatable,
            locations=tuple(locations),
            description=description,
            span=self._span_from(start_tok),
        )

    # ------------------------------------------------------------------
    # Members
    # ------------------------------------------------------------------

    def _parse_implements(self) -> tuple[NamedType, ...]:
        """Parse: ``('implements' '&'? NamedType ('&' NamedType)*)?``"""
        if not self._current().is_name("implements"):
            return ()
        self._advance()
        self._match(TokenType.AMP)
        interfaces = [self._parse_named_type()]
        while self._match(TokenType.AMP):
            interfaces.append(self._parse_named_type())
        return tuple(interfaces)

    def _parse_fields_definition(self) -> tuple[FieldDefinition, ...]:
        if not self._match(TokenType.LBRACE):
            return ()
        fields: list[FieldDefinition] = []
        while not self._match(TokenType.RBRACE):
            fields.append(self._parse_field())
        return tuple(fields)

    def _parse_field(self) -> FieldDefinition:
        """Parse: ``description? Name args? ':' Type directives?``"""
        start_tok = self._current()
        description = self._parse_description()
        name_tok = self._parse_name("field")
        arguments = self._parse_arguments_definition()
        self._expect(TokenType.COLON, f"Expected ':' after field {name_tok.value!r}")
        type_ref = self._parse_type()
        directives = self._parse_directives()
        return FieldDefinition(
            name=name_tok.value,
            arguments=arguments,
            type=type_ref,
            directives=directives,
            description=description,
            span=self._span_from(start_tok),
        )

    def _parse_arguments_definition(self) -> tuple[InputValueDefinition, ...]:
        if not self._match(TokenType.LPAREN):
            return ()
        arguments: list[InputValueDefinition] = []
        while not self._match(TokenType.RPAREN):
            arguments.append(self._parse_input_value())
        if not arguments:
            raise self._error("Argument list must not be empty")
        return tuple(arguments)

    def _parse_input_value(self) -> InputValueDefinition:
        """Parse: ``description? Name ':' Type ('=' Value)? directives?``"""
        start_tok = self._current()
        description = self._parse_description()
        name_tok = self._parse_name("argument")
        self._expect(TokenType.COLON, f"Expected ':' after {name_tok.value!r}")
        type_ref = self._parse_type()
        default: Value | None = None
        if self._match(TokenType.EQUALS):
            default = self._parse_value()
        directives = self._parse_directives()
        return InputValueDefinition(
            name=name_tok.value,
            type=type_ref,
            default_value=default,
            directives=directives,
            description=description,
            span=self._span_from(start_tok),
        )

    # ------------------------------------------------------------------
    # Directives
    # ------------------------------------------------------------------

    def _parse_directives(self) -> tuple[Directive, ...]:
        directives: list[Directive] = []
        while self._check(TokenType.AT):
            start_tok = self._advance()
            name_tok = self._parse_name("directive")
            arguments: list[Argument] = []
            if self._match(TokenType.LPAREN):
                while not self._match(TokenType.RPAREN):
                    arg_tok = self._parse_name("argument")
                    self._expect(TokenType.COLON, f"Expected ':' after argument {arg_tok.value!r}")
                    value = self._parse_value()
                    arguments.append(
                        Argument(name=arg_tok.value, value=value, span=self._span_from(arg_tok))
                    )
                if not arguments:
                    raise self._error("Directive argument list must not be empty")
            directives.append(
                Directive(
                    name=name_tok.value,
                    arguments=tuple(arguments),
                    span=self._span_from(start_tok),
                )
            )
        return tuple(directives)

    # ------------------------------------------------------------------
    # Types and values
    # ------------------------------------------------------------------

    def _parse_named_type(self) -> NamedType:
        tok = self._parse_name("type")
        return NamedType(name=tok.value, span=self._span_from(tok))

    def _parse_type(self) -> TypeRef:
        """Parse: ``(NamedType | '[' Type ']') '!'?``"""
        start_tok = self._current()
        type_ref: TypeRef
        if self._match(TokenType.LBRACKET):
            inner = self._parse_type()
            self._expect(TokenType.RBRACKET, "Expected ']' to close list type")
            type_ref = ListType(of_type=inner, span=self._span_from(start_tok))
        else:
            type_ref = self._parse_named_type()
        if self._match(TokenType.BANG):
            type_ref = NonNullType(of_type=type_ref, span=self._span_from(start_tok))
        return type_ref

    def _parse_value(self) -> Value:
        """Parse a constant value (variables are not allowed in SDL)."""
        tok = self._current()
        if tok.is_string:
            self._advance()
            return StringValue(
                value=tok.value,
                span=self._span_from(tok),
                block=tok.type is TokenType.BLOCK_STRING,
            )
        if tok.type is TokenType.INT:
            self._advance()
            return IntValue(value=tok.value, span=self._span_from(tok))
        if tok.type is TokenType.FLOAT:
            self._advance()
            return FloatValue(value=tok.value, span=self._span_from(tok))
        if tok.type is TokenType.NAME:
            self._advance()
            span = self._span_from(tok)
            if tok.value in ("true", "false"):
                return BooleanValue(value=tok.value == "true", span=span)
            if tok.value == "null":
                return NullValue(span=span)
            return EnumValue(value=tok.value, span=span)
        if tok.type is TokenType.LBRACKET:
            self._advance()
            items: list[Value] = []
            while not self._match(TokenType.RBRACKET):
                items.append(self._parse_value())
            return ListValue(values=tuple(items), span=self._span_from(tok))
        if tok.type is TokenType.LBRACE:
            self._advance()
            fields: list[ObjectField] = []
            while not self._match(TokenType.RBRACE):
                field_tok = self._parse_name("object field")
                self._expect(TokenType.COLON, f"Expected ':' after {field_tok.value!r}")
                fields.append(
                    ObjectField(
                        name=field_tok.value,
                        value=self._parse_value(),
                        span=self._span_from(field_tok),
                    )
                )
            return ObjectValue(fields=tuple(fields), span=self._span_from(tok))
        if tok.type is TokenType.DOLLAR:
            raise self._error("Variables are not allowed in constant values")
        raise self._error(f"Expected a value, got {tok.type.name} {tok.value!r}")


# ---------------------------------------------------------------------------
# Module-level convenience function
# ---------------------------------------------------------------------------


def parse(source: str, locator: str | None = None) -> tuple[Definition, ...]:
    """Parse SDL text and return its definitions in declaration order.

    Parameters
    ----------
    source:
        Complete schema text.
    locator:
        Optional name of the resource, used in error messages.

    Returns
    -------
    tuple[Definition, ...]
        The parsed definitions.

    Raises
    ------
    LexError
        If the source contains invalid characters or unterminated literals.
    ParseErrorCollection
        If the source contains syntactic errors.

    Example
    -------
    ::

        from apigen.parser import parse
        definitions = parse('''
            type User @java(package: "com.example") {
              id: ID!
              name: String
            }
        ''')
    """
    tokens = tokenize(source, locator)
    return Parser(tokens, locator).parse()
