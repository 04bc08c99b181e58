# wsgi.py
from didadmin import create_app

# Create the Flask app instance using the factory for the WSGI server (e.g., Gunicorn)
# create_app() loads the appropriate config (which loads .env) based on FLASK_ENV
application = create_app()

# Example Gunicorn command: gunicorn --bind 0.0.0.0:5000 wsgi:application

if __name__ == "__main__":
    print("WSGI entry point. To run the application, use a WSGI server like Gunicorn:")
    print("Example: gunicorn wsgi:application")
