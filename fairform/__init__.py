"""FairForm AI backend: intake classification, moderation and session lifecycle."""
