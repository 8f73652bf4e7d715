from flask import request
from flask_restful import Resource, Api
from ..constants import MAX_RECORDS
from ..exceptions import TableFullError
from ..storage.record import Record
from ..storage.table import Table


def init_routes(api: Api, table: Table):
    kwargs = {'table': table}

    api.add_resource(RecordList, '/api/records', resource_class_kwargs=kwargs)
    api.add_resource(TableStats, '/api/stats', resource_class_kwargs=kwargs)


class RecordList(Resource):
    def __init__(self, table: Table):
        self.table = table

    def get(self):
        records = self.table.select_all()
        return {
            'records': [record.to_dict() for record in records],
            'count': len(records)
        }

    def post(self):
        """Append one record and persist it"""
        data = request.get_json(silent=True)
        if not data:
            return {'error': 'No data provided'}, 400
        if not isinstance(data, dict):
            return {'error': 'Expected a JSON object'}, 400

        required = ['id', 'username', 'email']
        if not all(k in data for k in required):
            return {'error': 'Missing required fields: id, username, email'}, 400

        try:
            record = Record(data['id'], str(data['username']), str(data['email']))
        except ValueError as e:
            return {'error': str(e)}, 400

        try:
            self.table.append(record)
        except TableFullError as e:
            return {'error': str(e)}, 409

        self.table.flush()
        return record.to_dict(), 201


class TableStats(Resource):
    def __init__(self, table: Table):
        self.table = table

    def get(self):
        return {
            'record_count': self.table.record_count,
            'max_records': MAX_RECORDS,
            'pager': self.table.pager.get_stats()
        }
