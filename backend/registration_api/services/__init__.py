"""Services — business operations that turn repository outcomes into envelopes."""
