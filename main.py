import uvicorn
from fastapi import FastAPI

from database.DB import init_db
from migrations.url import migration_router
from node.url import node_router

init_db()

app = FastAPI()

app.include_router(node_router, prefix='/node')
app.include_router(migration_router, prefix='/migrations')

if __name__ == '__main__':
    uvicorn.run(app, host='127.0.0.1', port=8000)
