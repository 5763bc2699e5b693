# ABOUTME: Cratekeeper - a CLI-first inventory manager for resold records, CDs, and books.
# ABOUTME: Identifies items against the Discogs marketplace and estimates their resale value.
