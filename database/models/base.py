from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Matches the output size of text-embedding-3-small
EMBEDDING_DIMENSIONS = 1536
