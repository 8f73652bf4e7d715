import os
from flask import Flask
from flask_cors import CORS
from flask_restful import Api
from .routes import init_routes
from ..constants import DEFAULT_DB_PATH, DEFAULT_PORT
from ..storage.table import Table


def create_app(table: Table) -> Flask:
    app = Flask(__name__)
    CORS(app)  # Enable CORS for frontend communication
    api = Api(app)

    init_routes(api, table)

    return app


def main():
    db_path = os.environ.get("FLATDB_PATH", DEFAULT_DB_PATH)
    port = int(os.environ.get("FLATDB_PORT", DEFAULT_PORT))

    table = Table.open(db_path)
    app = create_app(table)
    print(f"Serving {db_path} on http://localhost:{port}")
    try:
        # The table has no locking; serve one request at a time
        app.run(host='0.0.0.0', port=port, threaded=False)
    finally:
        table.close()


if __name__ == "__main__":
    main()
