from sitecms.connections.media import media_lifespan
from sitecms.connections.mongo import mongo_lifespan
