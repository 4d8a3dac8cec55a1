"""Client for the job portal manager: session, storage backends and CLI."""
