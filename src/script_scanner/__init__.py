"""
Script Class Scanner
====================

A lightweight syntactic scanner for C#-style script sources. Given the
text of a script it lists the classes declared in it, with their
namespace, their nesting-qualified name and their direct base types,
without compiling the script or building a syntax tree.

Main Components
---------------
- **lexer**: Pull tokenizer with save/restore lookahead
- **parser**: Declaration scanner tracking namespaces, types and braces
- **scanner**: File reading, options and batch scanning
- **cli**: The `csclasses` command-line tool

What Is Reported
----------------
- Non-generic classes, including classes nested in classes or structs
- Base type names as written, with generic arguments removed

What Is Not
-----------
- Generic classes (parsed, then dropped)
- Structs, interfaces, enums and records
- Anything semantic: base types are not resolved or validated

Quick Start
-----------
    >>> from script_scanner import scan_classes
    >>> source = '''
    ... namespace Game.Actors {
    ...     public class Player : Actor, IDamageable {
    ...         class Inventory { }
    ...     }
    ... }
    ... '''
    >>> for decl in scan_classes(source):
    ...     print(decl.full_name, list(decl.base), decl.nested)
    Game.Actors.Player ['Actor', 'IDamageable'] False
    Game.Actors.Player.Inventory [] True

Or from the terminal:
    $ csclasses Scripts/ --format json
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from script_scanner.decls import ClassDecl, NameScope, ScopeKind
from script_scanner.errors import (
    ScriptScanError,
    ScriptSyntaxError,
    UnterminatedCommentError,
    UnterminatedStringError,
    UnexpectedCharacterError,
    UnexpectedTokenError,
    ExpectedTokenError,
    MissingIdentifierError,
    NestedNamespaceError,
    UnexpectedEOFError,
    UnbalancedBracesError,
    SourceEncodingError,
    ScanErrorCollector,
)
from script_scanner.lexer import ScriptLexer, Token, TokenType, ScanCursor
from script_scanner.parser import DeclarationScanner, parse_source
from script_scanner.scanner import (
    ScannerOptions,
    ScanResult,
    ScriptClassScanner,
    read_source,
    scan_classes,
    scan_file,
)

__all__ = [
    # Version
    "__version__",
    # Main API
    "ScriptClassScanner",
    "ScannerOptions",
    "ScanResult",
    "scan_classes",
    "scan_file",
    "read_source",
    # Records
    "ClassDecl",
    "NameScope",
    "ScopeKind",
    # Lexer
    "ScriptLexer",
    "Token",
    "TokenType",
    "ScanCursor",
    # Parser
    "DeclarationScanner",
    "parse_source",
    # Errors
    "ScriptScanError",
    "ScriptSyntaxError",
    "UnterminatedCommentError",
    "UnterminatedStringError",
    "UnexpectedCharacterError",
    "UnexpectedTokenError",
    "ExpectedTokenError",
    "MissingIdentifierError",
    "NestedNamespaceError",
    "UnexpectedEOFError",
    "UnbalancedBracesError",
    "SourceEncodingError",
    "ScanErrorCollector",
]
