"""ticketr - tickets-as-code Markdown format: parser, serializer and validator."""
