"""
Conventional controller/action routing.

URLs are described by route templates such as "{controller}/{action}" with
default values for trailing placeholders. Each template is expanded into
plain Flask URL rules on the mvc blueprint, and every rule dispatches to the
registered controller class and its action method.
"""

import re
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from flask import Blueprint, abort, request, url_for

# Registration order matters: earlier templates win for identical URLs.
ROUTE_TEMPLATES: List[Tuple[str, Dict[str, str]]] = [
    ("{controller}/{action}", {"controller": "Home", "action": "Index"}),
    ("{controller}", {"controller": "Home"}),
]

DEFAULT_ACTION = "Index"

_PLACEHOLDER = re.compile(r"^\{(\w+)\}$")

# Lower-cased controller name -> controller class
CONTROLLERS: Dict[str, type] = {}

mvc_bp = Blueprint("mvc", __name__)


def expand_route_template(template: str, defaults: Dict[str, str]) -> List[Tuple[str, Dict[str, str]]]:
    """
    Expand a route template into Flask URL rules.

    Trailing placeholders that have a default may be omitted from the URL;
    the omitted values are supplied as rule defaults. Literal segments are
    never omitted.

    Returns:
        (rule, defaults) pairs, longest rule first.
    """
    segments = [s for s in template.strip("/").split("/") if s]
    names: List[Optional[str]] = []
    for segment in segments:
        match = _PLACEHOLDER.match(segment)
        names.append(match.group(1) if match else None)

    rules = []
    for count in range(len(segments), -1, -1):
        omitted = names[count:]
        if any(name is None or name not in defaults for name in omitted):
            break
        parts = [
            f"<{name}>" if name else segment
            for segment, name in zip(segments[:count], names[:count])
        ]
        rule = "/" + "/".join(parts)
        rules.append((rule, {name: defaults[name] for name in omitted}))
    return rules


def build_url_rules(
    templates: Iterable[Tuple[str, Dict[str, str]]] = ROUTE_TEMPLATES,
) -> List[Tuple[str, Dict[str, str]]]:
    """Expand templates in order, keeping the first expansion of each URL."""
    seen = set()
    rules = []
    for template, defaults in templates:
        for rule, rule_defaults in expand_route_template(template, defaults):
            if rule in seen:
                continue
            seen.add(rule)
            rules.append((rule, rule_defaults))
    return rules


def controller(name: str) -> Callable[[type], type]:
    """Class decorator registering a controller under name."""

    def decorator(cls: type) -> type:
        cls.controller_name = name
        CONTROLLERS[name.lower()] = cls
        return cls

    return decorator


def action(*methods: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Mark a controller method as an action reachable over the given HTTP methods."""
    allowed = tuple(m.upper() for m in methods) or ("GET",)

    def decorator(f: Callable[..., Any]) -> Callable[..., Any]:
        f.action_methods = allowed
        return f

    return decorator


def resolve_action(controller_name: str, action_name: str) -> Tuple[type, Callable[..., Any]]:
    """
    Find the controller class and action function for a request.

    Names are matched case-insensitively.

    Raises:
        LookupError: No such controller or action.
    """
    cls = CONTROLLERS.get(controller_name.lower())
    if cls is None:
        raise LookupError(f"Unknown controller: {controller_name}")
    func = getattr(cls, action_name.lower(), None)
    if func is None or not hasattr(func, "action_methods"):
        raise LookupError(f"Unknown action: {controller_name}/{action_name}")
    return cls, func


def dispatch(controller: str, action: str = DEFAULT_ACTION):
    """View function shared by every expanded rule."""
    try:
        cls, func = resolve_action(controller, action)
    except LookupError:
        abort(404)
    method = "GET" if request.method == "HEAD" else request.method
    if method not in func.action_methods:
        abort(405)
    return func(cls())


def action_url(controller: str, action: str = DEFAULT_ACTION, **values: Any) -> str:
    """Build the URL of a controller action."""
    return url_for("mvc.route0", controller=controller, action=action, **values)


def _register_rules() -> None:
    for index, (rule, defaults) in enumerate(build_url_rules()):
        mvc_bp.add_url_rule(
            rule,
            endpoint=f"route{index}",
            view_func=dispatch,
            defaults=defaults,
            methods=["GET", "POST"],
        )


_register_rules()
