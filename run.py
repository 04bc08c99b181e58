# run.py
import os

from didadmin import create_app

# Use the app factory to create the app instance
# It will load configuration based on FLASK_ENV (from .env or .flaskenv) via config.py
app = create_app()

if __name__ == '__main__':
    # Flask's built-in server is for development only. Use Gunicorn/uWSGI in production.
    host = os.environ.get('FLASK_RUN_HOST', '127.0.0.1')
    port = int(os.environ.get('FLASK_RUN_PORT', 5000))
    app.run(host=host, port=port)
