"""Results handlers for Strapi v4 GraphQL responses."""


def authors(payload):
    """``{"data": {"authors": {"data": [{"id": "1"}, ...]}}}`` -> the author rows."""
    return payload["data"]["authors"]["data"]
