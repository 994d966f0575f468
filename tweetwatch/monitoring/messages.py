"""English chat strings for Twitter monitoring."""

HELP_ENABLE = "Enables the ability to post tweets."
HELP_DISABLE = "Disables the ability to post tweets."
HELP_EDIT_TWEETS = "Allows user to edit what the bot will post based on action received."
HELP_LIST_TWEETS = (
    "Shows the list of platform events the bot can react to, "
    "and the message posted for each."
)
HELP_EDIT_EVENTS = "Allows user to edit which events the bot will post about."

MONITORING_ALREADY = "Twitter monitoring is already enabled."
MONITORING_CONFIRMATION = "Twitter monitoring is enabled. Tweets will be posted as @{}."
MONITORING_NOTHING = "Twitter monitoring is not enabled, so there is nothing to disable."
MONITORING_DISABLED = "Twitter monitoring has been disabled."

EDIT_TWEET_INSTRUCTIONS = "To change what gets tweeted, say `{}`."
EDIT_EVENT_INSTRUCTIONS = "To choose which events get tweeted, say `{}`."

SET_USERNAME_PROMPT = "Which Twitter account should I post from? Reply with a number."
SET_USERNAME_FAILURE = "I could not set the Twitter username, so monitoring was not enabled."

EDIT_TWEETS_PROMPT = "Which tweet would you like to edit? Reply with its number."
MESSAGE_PROMPT = "What should the new tweet say?"
MESSAGE_NEW = "Got it. The new tweet will be: {}"

EDIT_EVENTS_PROMPT = "Which events should I tweet about? Reply with something like {}."
EDIT_EVENTS_HINT = "'enable 1,2,3' or 'disable 1 2'"
EDIT_EVENTS_ENABLE_OK = "Tweets for {} are now enabled."
EDIT_EVENTS_DISABLE_OK = "Tweets for {} are now disabled."
EDIT_EVENTS_NONE = "None of those are valid event numbers, so nothing changed."

CONVERSATION_RETRY = "Sorry, I did not understand that. Try again, or say `exit` to stop."
CONVERSATION_CANCELLED = "Okay, nothing was changed."
COMMAND_FAILURE = "Something went wrong while running that command."
