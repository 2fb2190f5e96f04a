"""Test configuration and fixtures."""

import logfire

# Keep spans local: no console noise, nothing sent
logfire.configure(send_to_logfire=False, console=False)
