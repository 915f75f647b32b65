"""Provider bindings: the Fly.io Machines API over HTTP and the local docker CLI."""
