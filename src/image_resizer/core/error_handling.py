# src/image_resizer/core/error_handling.py

import logging


class BatchOperationContextManager:
    """
    Context manager for batch operations to collect and summarize errors.
    """
    def __init__(self, operation_name="Batch Operation"):
        self.operation_name = operation_name
        self.errors = []
        self.logger = logging.getLogger("resizer." + self.__class__.__name__)

    def __enter__(self):
        self.logger.info(f"Starting {self.operation_name}.")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.errors:
            self.logger.warning(
                f"{self.operation_name} completed with {len(self.errors)} error(s)."
            )
            for i, error_detail in enumerate(self.errors):
                item_identifier = error_detail.get('item', 'Unknown item')
                error_message = error_detail.get('error', 'Unknown error')
                self.logger.error(
                    f"  Error {i+1}/{len(self.errors)} for item '{item_identifier}': {error_message}"
                )
        if exc_type:
            # An exception escaped the block without going through add_error
            self.logger.error(
                f"{self.operation_name} failed due to an unhandled exception: {exc_val}",
                exc_info=(exc_type, exc_val, exc_tb)
            )
        elif not self.errors:
            self.logger.info(f"{self.operation_name} completed successfully.")

        return False

    @property
    def error_count(self) -> int:
        return len(self.errors)

    def add_error(self, error_message: str, item_identifier: str = "Unknown item"):
        """
        Call this method within the 'with' block to report an error for a specific item.

        Args:
            error_message (str): The error message or exception string.
            item_identifier (str): A string identifying the item that failed (e.g., file path).
        """
        self.errors.append({"item": item_identifier, "error": str(error_message)})
        self.logger.debug(f"Error added for item '{item_identifier}' in {self.operation_name}: {error_message}")
