"""Qt-free building blocks shared by the widget, the exporter and the CLI."""
