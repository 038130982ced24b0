"""
Folio Site
==========

Run with:
    python app.py

Visit:
    http://localhost:3000          - Portfolio
    http://localhost:3000/api/...  - JSON API
"""

import logging

from folio import create_app
from folio.core.config import Config

logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s %(name)s: %(message)s')

app = create_app()


if __name__ == '__main__':
    print(f"[FOLIO] Server running at http://localhost:{Config.port}")
    app.run(host='0.0.0.0', port=Config.port, debug=False)
