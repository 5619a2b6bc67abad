"""Infrastructure Layer: web3 adapters, block polling, database, logging."""
