"""Split mbox archives into a Maildir with attachments extracted."""
