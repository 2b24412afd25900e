"""Startup order for a handful of services.

Payloads can be any object. Here each node holds a Service, and two
services with the same name would still be distinct nodes.
"""

from dataclasses import dataclass

import topograph as tg


@dataclass(frozen=True)
class Service:
    name: str
    port: int


graph = tg.Graph[Service]()

database = graph.create(Service("database", 5432))
cache = graph.create(Service("cache", 6379))
api = graph.create(Service("api", 8000))
worker = graph.create(Service("worker", 0))
frontend = graph.create(Service("frontend", 3000))

api.depends_on(database)
api.depends_on(cache)
worker.depends_on(database)
frontend.depends_on(api)

result = graph.sort()

if result.is_success:
    for service in result.values():
        print(f"start {service.name} (port {service.port})")
else:
    node, ancestor = result.cycle.values()
    print(f"cannot start: {node.name} and {ancestor.name} depend on each other")
