"""Routing — pattern compiler, route steps, and the ordered Router.

Routes are compiled once at registration and tested in registration
order at request time.
"""

from tinyroute.routing.params import decode_param
from tinyroute.routing.pattern import Matcher, ParamSpec, compile_pattern
from tinyroute.routing.route import Route, RouteMatch, method_matches
from tinyroute.routing.router import METHODS, Router

__all__ = [
    "METHODS",
    "Matcher",
    "ParamSpec",
    "Route",
    "RouteMatch",
    "Router",
    "compile_pattern",
    "decode_param",
    "method_matches",
]
