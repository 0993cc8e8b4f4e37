"""Entrypoints (inbound adapters) for COREBRIDGE.

Expose the boundary to the outside world: the three host entry points in
`corebridge.entrypoints.ffi` and the `corebridge` diagnostic CLI.

Dependency rule: may import `corebridge.bootstrap` and `corebridge.service_layer`;
avoid importing `corebridge.adapters` directly. Adapters the CLI needs, such as
the payload codec, are built by `corebridge.bootstrap`.
"""
