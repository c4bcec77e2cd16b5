from fastapi.testclient import TestClient
from locrelay.main import app
from locrelay.core.settings import settings

client = TestClient(app)
token = (settings.token_list() or ["ABC123"])[0]

print('ROOT:')
print(client.get('/').text)

print('\nHEALTH:')
print(client.get('/health').json())

print('\nPAGE (valid token):')
print(client.get(f'/loc/{token}').status_code)

print('\nPAGE (unknown token):')
resp = client.get('/loc/not-a-token')
print(resp.status_code, resp.text)

print('\nINTAKE (bad coords):')
resp = client.post('/api/location', json={'token': token, 'lat': 'x', 'lon': 1})
print(resp.status_code, resp.json())
