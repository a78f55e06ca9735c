from __future__ import annotations

import json
import logging

from annotable import Annotable, bind_annotated_methods

logging.basicConfig(level=logging.DEBUG)


class UserRoutes(Annotable):
    declare("route", "requires")

    route("/users", method="GET")
    def list_users(self) -> list[str]:
        return ["ada", "grace"]

    route("/users", method="POST")
    requires("admin")
    def create_user(self) -> str:
        return "created"

    def _helper(self) -> None: ...


if __name__ == "__main__":
    routes = UserRoutes()
    table = []
    for handler, method in bind_annotated_methods(routes, "route"):
        route = method.find_annotation("route")
        requires = method.find_annotation("requires")
        table.append(
            {
                "path": route.params[0],
                "method": route.options["method"],
                "handler": method.name,
                "requires": list(requires.params) if requires else [],
                "result": handler(),
            }
        )
    print(json.dumps(table, ensure_ascii=False, indent=2))
