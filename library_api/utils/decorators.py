from functools import wraps

from flask import current_app
from flask_jwt_extended import verify_jwt_in_request

from library_api.utils.auth import current_context
from library_api.utils.responses import fail


def role_required(*roles):
    """Verify the bearer token, gate on role and pass an ``AuthContext`` as the
    view's first argument. With no roles any authenticated caller passes."""
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            verify_jwt_in_request()
            ctx = current_context()
            if roles and ctx.role not in roles:
                current_app.logger.warning(
                    f"[auth] user={ctx.user_id} role={ctx.role} denied for {fn.__name__}"
                )
                return fail("Forbidden", 403)
            return fn(ctx, *args, **kwargs)
        return wrapper
    return decorator
