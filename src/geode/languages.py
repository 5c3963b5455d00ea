from __future__ import annotations

from .constants import HL_HIGHLIGHT_NUMBERS, HL_HIGHLIGHT_STRINGS
from .models import Language

PREPROCESSOR_KEYWORDS = (
    "#include",
    "#pragma",
    "#define",
    "#undef",
    "#ifdef",
    "#ifndef",
    "#endif",
    "#error",
)

C_KEYWORDS = (
    "auto",
    "break",
    "case",
    "continue",
    "default",
    "do",
    "else",
    "enum",
    "extern",
    "for",
    "goto",
    "if",
    "register",
    "return",
    "sizeof",
    "static",
    "struct",
    "switch",
    "typedef",
    "union",
    "volatile",
    "while",
    "NULL",
)

CPP_KEYWORDS = (
    "alignas",
    "alignof",
    "and",
    "and_eq",
    "asm",
    "bitand",
    "bitor",
    "class",
    "compl",
    "constexpr",
    "const_cast",
    "delete",
    "deltype",
    "dynamic_cast",
    "explicit",
    "export",
    "false",
    "friend",
    "inline",
    "mutable",
    "namespace",
    "new",
    "noexcept",
    "not",
    "not_eq",
    "nullptr",
    "operator",
    "or",
    "or_eq",
    "private",
    "protected",
    "public",
    "reinterpret_cast",
    "static_assert",
    "static_cast",
    "template",
    "this",
    "thread_local",
    "throw",
    "true",
    "try",
    "typeid",
    "typename",
    "virtual",
    "xor",
    "xor_eq",
)

# Type keywords (secondary class).
C_TYPES = (
    "int|",
    "long|",
    "double|",
    "float|",
    "char|",
    "unsigned|",
    "signed|",
    "void|",
    "short|",
    "auto|",
    "const|",
)

C_OPERATORS = ("+", "-", "*", "/", "%", "=", "<", ">", "!", "&", "|", "^", "~")

HLDB: tuple[Language, ...] = (
    Language(
        name="c",
        filematch=(".c", ".h"),
        keywords=PREPROCESSOR_KEYWORDS + C_KEYWORDS + C_TYPES,
        operators=C_OPERATORS,
        singleline_comment_start="//",
        multiline_comment_start="/*",
        multiline_comment_end="*/",
        flags=HL_HIGHLIGHT_NUMBERS | HL_HIGHLIGHT_STRINGS,
    ),
    Language(
        name="cpp",
        filematch=(".cc", ".cpp", ".hpp"),
        keywords=PREPROCESSOR_KEYWORDS + C_KEYWORDS + CPP_KEYWORDS + C_TYPES + ("bool|",),
        operators=C_OPERATORS,
        singleline_comment_start="//",
        multiline_comment_start="/*",
        multiline_comment_end="*/",
        flags=HL_HIGHLIGHT_NUMBERS | HL_HIGHLIGHT_STRINGS,
    ),
)
