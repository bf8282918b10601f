# Author: PB
# Maintainer: PB
# Original date: 2026.10.19
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# src/pinman/data/filename_validation.py

import unicodedata


# Global constants

_ILLEGAL_CHARS = {
    '\x00', '\r', '\n', '\t',  # Control chars
    '<', '>', '"', '|', '?', '*', # Windows-illegal
    *[chr(i) for i in range(32) if chr(i) not in {'\t', '\n', '\r'}] }  # Other controls

_SEPARATORS = {'/', '\\'}

_ILLEGAL_CODEPOINTS = {
    0x2028,  # LINE SEPARATOR
    0x2029,  # PARAGRAPH SEPARATOR
    0x202A, 0x202B, 0x202C, 0x202D, 0x202E,  # Bidi control
    0x200B, 0x200C, 0x200D,  # Zero-width characters
    0x2060, 0x2066, 0x2067, 0x2068, 0x2069,  # Invisible control marks
    0xFFF9, 0xFFFA, 0xFFFB,  # Interlinear annotation
    0xFFFC,  # Object Replacement Character
}

_WINDOWS_RESERVED_NAMES = {
    'con', 'prn', 'aux', 'nul',
    'com1', 'com2', 'com3', 'com4', 'com5', 'com6', 'com7', 'com8', 'com9',
    'lpt1', 'lpt2', 'lpt3', 'lpt4', 'lpt5', 'lpt6', 'lpt7', 'lpt8', 'lpt9'
}


def _has_unsafe_unicode(component: str) -> bool:
    for ch in component:
        cat = unicodedata.category(ch)
        if cat.startswith('C'):  # Control, Format, Surrogate, Unassigned
            return True
        if ord(ch) in _ILLEGAL_CODEPOINTS:
            return True
    return False


def validate_new_name(name: str) -> tuple[bool, str]:
    """
    Validate the target name of a rename.

    The name is joined onto the source file's directory, so it must be a
    single visible path component:
    - no separators and no relative components
    - no leading dot (would hide the file, or collide with the safety net)
    - reserved name checks (Windows)
    - illegal character and non-printable Unicode checks
    """
    if not name:
        return (False, "Name cannot be empty")

    try:
        name.encode('utf-8')
    except UnicodeEncodeError:
        return (False, "Name must be UTF-8 encodable")

    if set(name) & _SEPARATORS:
        return (False, f"Name '{name}' must not contain path separators")

    if name in ('.', '..'):
        return (False, f"Relative path component '{name}' not allowed")

    if name.startswith('.'):
        return (False, f"Hidden name '{name}' not allowed")

    if len(name.encode('utf-8')) > 255:
        return (False, f"Name '{name}' exceeds max length of 255 bytes")

    base = name.split('.')[0].lower()
    if base in _WINDOWS_RESERVED_NAMES:
        return (False, f"Reserved name '{name}' (Windows)")

    if name != name.strip():
        return (False, f"Name '{name}' has leading/trailing whitespace")

    # Fast illegal character check
    if set(name) & _ILLEGAL_CHARS:
        return (False, f"Name '{name}' contains illegal characters")

    if _has_unsafe_unicode(name):
        return (False, f"Name '{name}' contains non-printable or control characters")

    return (True, "Name is valid")


# done
