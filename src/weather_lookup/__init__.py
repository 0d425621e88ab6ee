"""Command-line weather lookup over interchangeable weather providers."""
