from flask import jsonify, request, current_app


def ok(data=None, message=None, code=200):
    body = {"status": True}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = data
    return jsonify(body), code


def fail(message, code=400, errors=None):
    body = {"status": False, "message": message}
    if errors:
        body["errors"] = errors
    return jsonify(body), code


def paginate(query, serializer):
    """Offset pagination driven by ``?page=N`` with the configured fixed page size."""
    page = request.args.get("page", 1, type=int)
    per_page = current_app.config["PER_PAGE"]
    result = query.paginate(page=page, per_page=per_page, error_out=False)
    return {
        "current_page": result.page,
        "data": [serializer(x) for x in result.items],
        "per_page": result.per_page,
        "total": result.total,
        "last_page": result.pages or 1,
    }
