# app/utils/background.py
import threading

from flask import current_app


def spawn_best_effort(target, *args, description=None, **kwargs):
    """Run target outside the request; failures are logged, never raised.

    The job runs inside an app context on a daemon thread. With
    BACKGROUND_TASKS_INLINE set it runs before this call returns instead.
    """
    app = current_app._get_current_object()
    description = description or getattr(target, '__name__', 'background task')

    def runner():
        with app.app_context():
            try:
                target(*args, **kwargs)
            except Exception as e:
                app.logger.warning(f"Background task {description} failed: {str(e)}", exc_info=True)

    if app.config.get('BACKGROUND_TASKS_INLINE'):
        runner()
        return None

    thread = threading.Thread(target=runner, name=f'best-effort-{description}', daemon=True)
    thread.start()
    return thread
