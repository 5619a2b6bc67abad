"""Services Layer: async orchestration over the core (call dispatch, balance sync)."""
