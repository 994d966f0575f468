"""twitchio components loaded by the tweetwatch bot."""
