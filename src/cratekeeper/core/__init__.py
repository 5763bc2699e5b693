# ABOUTME: Core workflows for Cratekeeper: SKU allocation, item creation, batch identification.
