def register(client, email='a@b.com', password='secret1'):
    return client.post('/api/register', json={'email': email, 'password': password})


def login(client, email='a@b.com', password='secret1'):
    return client.post('/api/login', json={'email': email, 'password': password})
