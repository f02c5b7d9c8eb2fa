#setup: pip install -e .
#setup: flask --app superforecast.wsgi run --port 5000 --debug

from superforecast.app import create_app

app = create_app()


if __name__ == "__main__":
    app.run(port=5000, debug=True)
