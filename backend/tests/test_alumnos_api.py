def test_startup_seeds_four_alumnos(client):
    r = client.get('/Alumnos')
    assert r.status_code == 200
    data = r.json()
    assert [a['nombre'] for a in data] == ['Jimi Hendrix', 'Carlos Tevez', 'Post Malone', 'Jimmy Kimmel']
    assert set(data[0]) == {'id', 'nombre', 'email', 'fecha_nacimiento'}


def test_get_alumno_includes_cursadas(client):
    r = client.get('/Alumnos/1')
    assert r.status_code == 200
    body = r.json()
    assert body['nombre'] == 'Jimi Hendrix'
    assert 'created_at' not in body and 'updated_at' not in body
    assert body['cursadas'] == [
        {'id': 1, 'materia': 'Historia', 'anio': 1953, 'cuatrimestre': 2, 'aprobada': True, 'alumnoId': 1}
    ]


def test_get_missing_alumno_is_404(client):
    r = client.get('/Alumnos/99999')
    assert r.status_code == 404
    assert r.json() == {'error': 'No se encontró al Alumno con ID 99999.'}


def test_create_alumno_then_fetch_it(client):
    payload = {'nombre': 'Mercedes Sosa', 'email': 'mercedes@sosa.com', 'fecha_nacimiento': '1935-07-09'}
    r = client.post('/Alumnos/', json=payload)
    assert r.status_code == 200
    new_id = r.json()['id']
    assert isinstance(new_id, int) and new_id > 0

    fetched = client.get(f'/Alumnos/{new_id}').json()
    assert fetched['nombre'] == payload['nombre']
    assert fetched['email'] == payload['email']
    assert fetched['fecha_nacimiento'] == '1935-07-09'
    assert fetched['cursadas'] == []


def test_create_alumno_without_nombre_is_409(client):
    r = client.post('/Alumnos/', json={'email': 'sin@nombre.com', 'fecha_nacimiento': '2000-01-01'})
    assert r.status_code == 409
    errores = r.json()['errores']
    assert any('"nombre"' in e for e in errores)
    assert len(client.get('/Alumnos').json()) == 4


def test_create_alumno_reports_all_errors(client):
    r = client.post('/Alumnos/', json={'nombre': '', 'email': 'nope'})
    assert r.status_code == 409
    assert len(r.json()['errores']) == 3


def test_create_alumno_with_non_object_body(client):
    r = client.post('/Alumnos/', json=['Mercedes Sosa'])
    assert r.status_code == 409
    assert len(r.json()['errores']) == 3


def test_patch_alumno_updates_given_fields(client):
    r = client.patch('/Alumnos/2', json={'nombre': 'Carlitos Tevez'})
    assert r.status_code == 200
    assert r.json() == {'id': 2}
    body = client.get('/Alumnos/2').json()
    assert body['nombre'] == 'Carlitos Tevez'
    assert body['email'] == 'carlos@tevez.com'


def test_patch_missing_alumno_is_404(client):
    r = client.patch('/Alumnos/99999', json={'nombre': 'Nadie'})
    assert r.status_code == 404
    assert r.json() == {'error': 'No se encontró el Alumno con ID 99999.'}


def test_patch_with_invalid_field_is_500(client):
    r = client.patch('/Alumnos/3', json={'email': 'no-es-un-mail'})
    assert r.status_code == 500
    assert r.json() == {'error': 'Ha ocurrido un error al actualizar los datos.'}
    assert client.get('/Alumnos/3').json()['email'] == 'post@malone.com'


def test_delete_missing_alumno_is_404(client):
    r = client.delete('/Alumnos/99999')
    assert r.status_code == 404
    assert r.json() == {'error': 'Alumno no encontrado'}


def test_delete_alumno_keeps_its_cursadas(client):
    r = client.delete('/Alumnos/1')
    assert r.status_code == 200
    assert r.json() == 'ok'
    assert client.get('/Alumnos/1').status_code == 404
    # cursada 1 belonged to alumno 1 and is still addressable
    assert client.patch('/Cursada/Aprobar/1').status_code == 200


def test_request_id_header_exists(client):
    r = client.get('/health')
    assert r.status_code == 200
    assert r.json() == {'status': 'ok'}
    assert 'X-Request-ID' in r.headers
    echoed = client.get('/health', headers={'X-Request-ID': 'abc123'})
    assert echoed.headers['X-Request-ID'] == 'abc123'


def test_deleted_alumno_id_is_never_reused(client):
    created = client.post('/Alumnos/', json={'nombre': 'Viejo', 'email': 'viejo@alumno.com', 'fecha_nacimiento': '1980-01-01'})
    old_id = created.json()['id']
    assert client.post(f'/Alumnos/{old_id}/Cursada', json={'anio': 2000, 'cuatrimestre': 1, 'materia': 'Vieja'}).status_code == 200
    assert client.delete(f'/Alumnos/{old_id}').status_code == 200

    r = client.post('/Alumnos/', json={'nombre': 'Nuevo', 'email': 'nuevo@alumno.com', 'fecha_nacimiento': '2001-01-01'})
    new_id = r.json()['id']
    assert new_id != old_id
    assert client.get(f'/Alumnos/{new_id}').json()['cursadas'] == []


def test_create_alumno_accepts_full_timestamp(client):
    payload = {'nombre': 'Luis Spinetta', 'email': 'luis@spinetta.com', 'fecha_nacimiento': '1990-05-10T12:30:00.000Z'}
    r = client.post('/Alumnos/', json=payload)
    assert r.status_code == 200
    assert client.get(f"/Alumnos/{r.json()['id']}").json()['fecha_nacimiento'] == '1990-05-10'


def test_non_numeric_alumno_id_is_404(client):
    r = client.get('/Alumnos/abc')
    assert r.status_code == 404
    assert r.json() == {'error': 'No se encontró al Alumno con ID abc.'}
    r = client.patch('/Alumnos/abc', json={'nombre': 'Nadie'})
    assert r.status_code == 404
    assert r.json() == {'error': 'No se encontró el Alumno con ID abc.'}
    r = client.delete('/Alumnos/abc')
    assert r.status_code == 404
    assert r.json() == {'error': 'Alumno no encontrado'}
    r = client.get('/Alumnos/99999999999999999999999')
    assert r.status_code == 404
