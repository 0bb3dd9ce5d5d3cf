from sitecms.utils.config.env import Settings, settings
