# Pulse Config
# Central configuration for the Pulse feedback service

import os

# Database
DATABASE_URL = os.environ.get('DATABASE_URL', 'sqlite:///pulse.db')

# Sentiment classifier ('workers-ai' or 'anthropic')
CLASSIFIER_BACKEND = os.environ.get('CLASSIFIER_BACKEND', 'workers-ai')

# Cloudflare Workers AI
CLOUDFLARE_ACCOUNT_ID = os.environ.get('CLOUDFLARE_ACCOUNT_ID')
CLOUDFLARE_API_TOKEN = os.environ.get('CLOUDFLARE_API_TOKEN')
SENTIMENT_MODEL = os.environ.get('SENTIMENT_MODEL', '@cf/huggingface/distilbert-sst-2-int8')

# Anthropic
ANTHROPIC_API_KEY = os.environ.get('ANTHROPIC_API_KEY')
ANTHROPIC_MODEL = 'claude-sonnet-4-20250514'

# Sentiment labels, in the order the dashboard shows them
SENTIMENTS = ('positive', 'neutral', 'negative')

# Below this the model's answer is treated as neutral
CONFIDENCE_THRESHOLD = 0.6

# Query limits
KEYWORD_MAX_LENGTH = 50
RECENT_LIMIT = 20
FILTERED_LIMIT = 50

DEFAULT_SOURCE = 'unknown'

# Logging
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
