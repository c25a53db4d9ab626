"""
Declaration Scanner
===================

This module implements a recursive descent scanner that finds class
declarations in C#-style script source without building a syntax tree.
It recognizes `namespace`, `class`, `struct` and `where` by keyword,
tracks brace nesting to know which namespace and type every declaration
lives in, and skips everything else token by token.

Recognized Grammar (Simplified EBNF)
------------------------------------
namespace_decl  ::= 'namespace' IDENTIFIER ('.' IDENTIFIER)* '{'
class_decl      ::= 'class' IDENTIFIER type_params? class_tail
class_tail      ::= '{' | ':' base_list | constraints
base_list       ::= full_type_name (',' full_type_name)* ('{' | constraints)
struct_decl     ::= 'struct' <tokens, first IDENTIFIER is the name> '{'
constraints     ::= 'where' IDENTIFIER ':' constraint (',' constraint)*
                    (constraints | '{')
constraint      ::= qualified_name type_args? '?'? ('(' ')')?

full_type_name  ::= IDENTIFIER type_args? ('.' full_type_name)?
type_args       ::= '<' (type_arg? (',' type_arg?)*) '>' '?'?
type_arg        ::= tuple_type | qualified_name type_args? ('[' ']')* '?'?
tuple_type      ::= '(' tuple_item (',' tuple_item)* ')' '?'?
tuple_item      ::= (tuple_type | qualified_name type_args? ('[' ']')* '?'?)
                    IDENTIFIER?

Every '{' opens a scope on a stack and every '}' closes the innermost
one. Scopes opened by namespace, class and struct headers carry their
name; all others are anonymous blocks.

Output
------
Only non-generic classes are emitted. Generic classes are still fully
parsed so that brace tracking stays correct, then dropped (and reported
through logging and an optional callback). Structs are never emitted,
but their names prefix classes nested inside them.

Example Usage
-------------
>>> from script_scanner.parser import DeclarationScanner
>>> scanner = DeclarationScanner('namespace A.B { class Outer { class Inner { } } }')
>>> for decl in scanner.parse():
...     print(decl.full_name, decl.nested)
A.B.Outer False
A.B.Outer.Inner True
"""

import logging
from typing import Callable, Optional

from script_scanner.decls import ClassDecl, NameScope, ScopeKind
from script_scanner.errors import (
    ExpectedTokenError,
    MissingIdentifierError,
    NestedNamespaceError,
    UnbalancedBracesError,
    UnexpectedEOFError,
    UnexpectedTokenError,
)
from script_scanner.lexer import ScriptLexer, Token, TokenType

logger = logging.getLogger(__name__)


# Lookahead that distinguishes a constraint clause from any other 'where'
CONSTRAINT_START = (TokenType.IDENTIFIER, TokenType.COLON, TokenType.IDENTIFIER)


class DeclarationScanner:
    """
    Scans script source for class declarations.

    A scanner owns its lexer, scope stack and result list, so separate
    instances can be used from separate threads. Calling parse() again
    rescans the source from the start.

    Attributes:
        source: The script source text
        on_ignored_generic: Called with the namespace-qualified name of
            each generic class that is parsed but not emitted
    """

    def __init__(
        self,
        source: str,
        on_ignored_generic: Optional[Callable[[str], None]] = None,
    ):
        self.source = source
        self.on_ignored_generic = on_ignored_generic

        self._lexer = ScriptLexer(source)

        # One entry per currently open '{', innermost last
        self._scopes: list[NameScope] = []

        self._classes: list[ClassDecl] = []

    def parse(self) -> list[ClassDecl]:
        """
        Scan the whole source.

        Returns:
            Emitted class declarations in source order

        Raises:
            ScriptSyntaxError: On the first lexical or syntax error
            UnbalancedBracesError: If braces are still open at EOF
        """
        self._lexer = ScriptLexer(self.source)
        self._scopes = []
        self._classes = []

        token = self._next()

        while token.type is not TokenType.EOF:
            # 'class' and 'struct' can appear as constraints, so constraint
            # clauses are consumed before looking for declarations
            if token.is_identifier("where"):
                if self._lexer.probe_sequence(CONSTRAINT_START):
                    self._parse_type_constraints()
                    self._scopes.append(NameScope(ScopeKind.BLOCK))

            elif token.is_identifier("class"):
                name_token = self._next()
                if not name_token.is_identifier():
                    token = name_token
                    continue
                self._parse_class(name_token.value)

            elif token.is_identifier("struct"):
                self._parse_struct()

            elif token.is_identifier("namespace"):
                self._parse_namespace()

            elif token.type is TokenType.CURLY_BRACKET_OPEN:
                self._scopes.append(NameScope(ScopeKind.BLOCK))

            elif token.type is TokenType.CURLY_BRACKET_CLOSE:
                if not self._scopes:
                    raise self._unexpected(token)
                self._scopes.pop()

            token = self._next()

        if self._scopes:
            raise UnbalancedBracesError(len(self._scopes))

        logger.debug(f"Found {len(self._classes)} class declarations")
        return list(self._classes)

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def _next(self) -> Token:
        return self._lexer.next_token()

    def _unexpected(self, token: Token) -> UnexpectedTokenError:
        return UnexpectedTokenError(token.type.display_name, self._lexer.line)

    def _expected(
        self,
        expected: TokenType,
        token: Token,
        context: Optional[str] = None,
    ) -> ExpectedTokenError:
        return ExpectedTokenError(
            expected.display_name,
            token.type.display_name,
            self._lexer.line,
            context=context,
        )

    # =========================================================================
    # Scope Bookkeeping
    # =========================================================================

    def _type_depth(self) -> int:
        """Number of open class and struct bodies."""
        return sum(1 for scope in self._scopes if scope.is_type)

    def _qualify(self, name: str) -> tuple[str, str]:
        """
        Build the namespace and owner-qualified name for a declaration
        made at the current nesting.

        Returns:
            (namespace, name) such as ("A.B", "Outer.Inner")
        """
        namespaces = []
        owners = []
        for scope in self._scopes:
            if scope.kind is ScopeKind.NAMESPACE:
                namespaces.append(scope.name)
            elif scope.is_type:
                owners.append(scope.name)
        return ".".join(namespaces), ".".join(owners + [name])

    # =========================================================================
    # Declarations
    # =========================================================================

    def _parse_class(self, name: str) -> None:
        """
        Parse a class header after its name, up to and including the
        opening '{' of the body.
        """
        namespace, qualified_name = self._qualify(name)
        nested = self._type_depth() > 0

        base: list[str] = []
        generic = False

        while True:
            token = self._next()

            if token.type is TokenType.COLON:
                base = self._parse_class_base()
                break
            if token.type is TokenType.CURLY_BRACKET_OPEN:
                break
            if token.type is TokenType.OP_LESS and not generic:
                generic = True
                self._skip_generic_type_params()
                continue
            if token.is_identifier("where"):
                # Consumes the opening '{'
                self._parse_type_constraints()
                break

            raise self._unexpected(token)

        self._scopes.append(NameScope(ScopeKind.CLASS, name))

        decl = ClassDecl(
            namespace=namespace,
            name=qualified_name,
            base=tuple(base),
            nested=nested,
        )

        if not generic:
            self._classes.append(decl)
        else:
            logger.debug(f"Ignoring generic class declaration: {decl.full_name}")
            if self.on_ignored_generic is not None:
                self.on_ignored_generic(decl.full_name)

    def _parse_class_base(self) -> list[str]:
        """
        Parse the base list after ':' up to and including the opening '{'.

        Returns:
            Base type names in source order
        """
        base = []

        while True:
            base.append(self._parse_full_type_name())

            token = self._next()
            if token.type is TokenType.COMMA:
                continue
            if token.is_identifier("where"):
                self._parse_type_constraints()
                return base
            if token.type is TokenType.CURLY_BRACKET_OPEN:
                return base

            raise self._unexpected(token)

    def _parse_struct(self) -> None:
        """
        Parse a struct header: the first identifier is its name and
        everything else up to the opening '{' is skipped.
        """
        name = None

        while True:
            token = self._next()

            if token.is_identifier() and name is None:
                name = token.value
            elif token.type is TokenType.CURLY_BRACKET_OPEN:
                if name is None:
                    raise MissingIdentifierError(
                        "struct", token.type.display_name, self._lexer.line
                    )
                break
            elif token.type is TokenType.EOF:
                raise UnexpectedEOFError(
                    TokenType.CURLY_BRACKET_OPEN.display_name,
                    "struct declaration",
                    self._lexer.line,
                )

        self._scopes.append(NameScope(ScopeKind.STRUCT, name))

    def _parse_namespace(self) -> None:
        """Parse a namespace header up to and including its '{'."""
        if self._type_depth() > 0:
            raise NestedNamespaceError(self._lexer.line)

        name = self._parse_namespace_name()
        self._scopes.append(NameScope(ScopeKind.NAMESPACE, name))

    def _parse_namespace_name(self) -> str:
        """Parse 'A.B.C {' and return 'A.B.C'."""
        parts = []

        while True:
            token = self._next()
            if not token.is_identifier():
                raise self._unexpected(token)
            parts.append(token.value)

            token = self._next()
            if token.type is TokenType.PERIOD:
                continue
            if token.type is TokenType.CURLY_BRACKET_OPEN:
                return ".".join(parts)

            raise self._unexpected(token)

    # =========================================================================
    # Type Names
    # =========================================================================

    def _parse_full_type_name(self) -> str:
        """
        Parse a possibly qualified type name, dropping generic arguments.

        'Outer<int>.Inner' yields 'Outer.Inner'. A segment only continues
        when a '.' immediately follows the previous token.
        """
        token = self._next()
        if not token.is_identifier():
            raise self._expected(TokenType.IDENTIFIER, token)

        name = token.value

        if self._lexer.probe(TokenType.OP_LESS):
            self._next()
            self._skip_generic_type_params()

        if self._lexer.peek_char() != ".":
            return name

        self._next()  # the '.'
        return f"{name}.{self._parse_full_type_name()}"

    def _skip_qualified_type(self) -> Token:
        """
        Skip the rest of a qualified type name whose first identifier
        was just read, plus its generic arguments if present.

        Returns:
            The token following the type
        """
        token = self._next()

        while token.type is TokenType.PERIOD:
            token = self._next()
            if not token.is_identifier():
                raise self._expected(TokenType.IDENTIFIER, token)
            token = self._next()

        if token.type is TokenType.OP_LESS:
            self._skip_generic_type_params()
            token = self._next()

        return token

    def _skip_type_suffixes(self, token: Token) -> Token:
        """Skip '[]' array suffixes and a trailing nullable '?'."""
        while token.type is TokenType.BRACKET_OPEN:
            token = self._next()
            if token.type is not TokenType.BRACKET_CLOSE:
                raise self._expected(TokenType.BRACKET_CLOSE, token, context="after [")
            token = self._next()

        if token.type is TokenType.QUESTION:
            token = self._next()

        return token

    # =========================================================================
    # Generic and Tuple Type Lists
    # =========================================================================

    def _skip_generic_type_params(self) -> None:
        """Skip a generic argument list whose '<' was just read."""
        self._skip_type_list(TokenType.OP_GREATER, element_names=False)

    def _skip_tuple_type_params(self) -> None:
        """Skip a tuple type whose '(' was just read."""
        self._skip_type_list(TokenType.PARENS_CLOSE, element_names=True)

    def _skip_type_list(self, closer: TokenType, element_names: bool) -> None:
        """
        Skip a comma-separated list of types up to the matching closer,
        plus a nullable '?' right after it.

        Generic lists allow empty elements (Dictionary<,>). Tuple lists
        require a type in every element and allow an element name after
        it ((int a, string b)).
        """
        while True:
            token = self._next()

            if token.type is TokenType.PARENS_OPEN:
                self._skip_tuple_type_params()
                token = self._next()
            elif token.is_identifier():
                token = self._skip_type_suffixes(self._skip_qualified_type())
            elif element_names:
                raise self._unexpected(token)

            if element_names and token.is_identifier():
                token = self._next()

            if token.type is closer:
                if self._lexer.probe(TokenType.QUESTION):
                    self._next()
                return

            if token.type is not TokenType.COMMA:
                raise self._unexpected(token)

    # =========================================================================
    # Type Constraints
    # =========================================================================

    def _parse_type_constraints(self) -> None:
        """
        Parse constraint clauses after 'where', up to and including the
        '{' that follows them.

        Example:
            where T : class, IComparable<T>, new() where U : struct {
        """
        token = self._next()
        if not token.is_identifier():
            raise self._unexpected(token)

        token = self._next()
        if token.type is not TokenType.COLON:
            raise self._unexpected(token)

        while True:
            token = self._next()
            if not token.is_identifier():
                raise self._expected(TokenType.IDENTIFIER, token)
            if token.value == "where":
                return self._parse_type_constraints()

            token = self._skip_qualified_type()

            if token.type is TokenType.QUESTION:
                token = self._next()

            # Constructor constraint: new()
            if token.type is TokenType.PARENS_OPEN:
                token = self._next()
                if token.type is not TokenType.PARENS_CLOSE:
                    raise self._unexpected(token)
                token = self._next()

            if token.type is TokenType.COMMA:
                continue
            if token.is_identifier("where"):
                return self._parse_type_constraints()
            if token.type is TokenType.CURLY_BRACKET_OPEN:
                return

            raise self._unexpected(token)


# =============================================================================
# Convenience Functions
# =============================================================================

def parse_source(source: str) -> list[ClassDecl]:
    """
    Scan source text and return its class declarations.

    Raises:
        ScriptScanError: If the source cannot be scanned
    """
    return DeclarationScanner(source).parse()
