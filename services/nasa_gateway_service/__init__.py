"""NASA Gateway Service: proxy in front of the NASA open APIs."""
