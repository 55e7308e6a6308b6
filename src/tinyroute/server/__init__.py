"""ASGI glue: context construction, error mapping, response sending."""
