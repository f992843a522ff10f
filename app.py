"""Development entry point: ``flask --app app run`` or ``python app.py``."""
from campus_events import create_app

app = create_app()

if __name__ == '__main__':
    app.run()
