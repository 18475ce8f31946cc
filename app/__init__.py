"""Campus Chat direct-messaging client."""
