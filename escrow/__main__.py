import logging

from escrow import build_ledger
from escrow.config import EscrowConfig, setup_logging
from escrow.service import create_app

logger = logging.getLogger("escrow")


if __name__ == "__main__":
    config = EscrowConfig.from_env()
    setup_logging(config.log)
    ledger = build_ledger(config)
    n, _ = ledger.get_public_key()
    logger.info("Serving %d-bit key, escrow unit %d", n.bit_length(), ledger.unit)
    web = create_app(ledger)
    web.run(host=config.host, port=config.port)
