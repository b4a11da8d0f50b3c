"""Flask front end for ArchPass."""
