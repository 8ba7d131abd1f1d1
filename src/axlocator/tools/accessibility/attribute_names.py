"""
Well-known attribute names and the alias table used by criteria.

Criteria coming from JSON may say "role", "Role" or "AXRole"; all of them are
folded onto the canonical name here before anything is read from a provider.
Unknown names are passed through untouched.
"""

from typing import Dict

AX_ROLE = "AXRole"
AX_SUBROLE = "AXSubrole"
AX_IDENTIFIER = "AXIdentifier"
AX_TITLE = "AXTitle"
AX_VALUE = "AXValue"
AX_DESCRIPTION = "AXDescription"
AX_HELP = "AXHelp"
AX_PLACEHOLDER_VALUE = "AXPlaceholderValue"
AX_ROLE_DESCRIPTION = "AXRoleDescription"
AX_CHILDREN = "AXChildren"
AX_ACTIONS = "AXActions"
AX_ENABLED = "AXEnabled"
AX_FOCUSED = "AXFocused"
AX_HIDDEN = "AXHidden"
AX_DOM_CLASS_LIST = "AXDOMClassList"
AX_WINDOWS = "AXWindows"

# Computed attributes: not read from the provider directly.
COMPUTED_NAME = "ComputedName"
COMPUTED_NAME_WITH_VALUE = "ComputedNameWithValue"
PID = "PID"
IS_IGNORED = "IsIgnored"
IS_CLICKABLE = "IsClickable"

# Attributes whose absence is logged separately while matching.
STRUCTURAL_ATTRIBUTES = frozenset({AX_ROLE, PID})

AX_PRESS = "AXPress"
APPLICATION_ROLE = "AXApplication"
WINDOW_ROLES = ("AXWindow", "AXSheet", "AXDrawer")

_ALIASES: Dict[str, str] = {
    "role": AX_ROLE,
    "axrole": AX_ROLE,
    "subrole": AX_SUBROLE,
    "axsubrole": AX_SUBROLE,
    "id": AX_IDENTIFIER,
    "identifier": AX_IDENTIFIER,
    "axidentifier": AX_IDENTIFIER,
    "title": AX_TITLE,
    "axtitle": AX_TITLE,
    "value": AX_VALUE,
    "axvalue": AX_VALUE,
    "description": AX_DESCRIPTION,
    "axdescription": AX_DESCRIPTION,
    "help": AX_HELP,
    "placeholder": AX_PLACEHOLDER_VALUE,
    "roledescription": AX_ROLE_DESCRIPTION,
    "enabled": AX_ENABLED,
    "focused": AX_FOCUSED,
    "name": COMPUTED_NAME,
    "computedname": COMPUTED_NAME,
    "namewithvalue": COMPUTED_NAME_WITH_VALUE,
    "computednamewithvalue": COMPUTED_NAME_WITH_VALUE,
    "pid": PID,
    "ignored": IS_IGNORED,
    "isignored": IS_IGNORED,
    "clickable": IS_CLICKABLE,
    "isclickable": IS_CLICKABLE,
    "dom": AX_DOM_CLASS_LIST,
    "classlist": AX_DOM_CLASS_LIST,
    "domclasslist": AX_DOM_CLASS_LIST,
    "axdomclasslist": AX_DOM_CLASS_LIST,
}

# Keys that designate the application itself when they lead a path hint.
APP_SPECIFIER_KEYS = frozenset({"application", "app", "bundle_id", "bundleid", "pid", "path"})


def normalize_attribute_name(name: str) -> str:
    """
    Map an attribute alias onto its canonical name.

    >>> normalize_attribute_name("role")
    'AXRole'
    >>> normalize_attribute_name("AXCustomThing")
    'AXCustomThing'
    """
    stripped = name.strip()
    return _ALIASES.get(stripped.lower(), stripped)
