"""Default configuration template.

This template is written to ~/.config/mailsift/config.toml
when running `mailsift config init`.
"""

CONFIG_TEMPLATE = """\
# mailsift configuration

[defaults]
output = "json"
max_results = 500
concurrency = 8
# batch_size = "1 month"

[gmail]
# Either point at the OAuth client JSON downloaded from Google Cloud Console:
# credentials_file = "~/credentials.json"
#
# or give the client ID directly:
# client_id = "xxxxxx.apps.googleusercontent.com"
#
# For client_secret, use the MAILSIFT_GMAIL_CLIENT_SECRET environment variable.
#
# Then authenticate with:
#   mailsift auth login
"""
