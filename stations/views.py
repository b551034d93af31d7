"""
Views — thin, no business logic (HackSoft Django Styleguide).

Responsibility: call selector/service, map the result to a status code,
serialize output. Every service call is wrapped so that a failure answers
500 with the fixed ``{"error": "Internal Server Error"}`` envelope.
"""

import logging

from rest_framework import serializers, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from stations.constants import (
    INTERNAL_ERROR_MESSAGE,
    PLACES_MAX_RADIUS_M,
    WASHING_STATION_DELETED,
    WASHING_STATION_NOT_FOUND,
)
from stations.selectors import washing_station_get, washing_station_list
from stations.services import (
    nearby_gas_stations,
    nearby_washing_stations,
    station_details,
    washing_station_create,
    washing_station_delete,
    washing_station_update,
)

logger = logging.getLogger(__name__)


def _internal_error() -> Response:
    return Response(
        {"error": INTERNAL_ERROR_MESSAGE},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def _not_found() -> Response:
    return Response(
        {"error": WASHING_STATION_NOT_FOUND},
        status=status.HTTP_404_NOT_FOUND,
    )


class WashingStationOutputSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    location = serializers.DictField(child=serializers.FloatField(), allow_null=True)
    address = serializers.CharField()
    status = serializers.CharField()
    place_id = serializers.CharField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


# ---------------------------------------------------------------------------
# Washing stations (CRUD)
# ---------------------------------------------------------------------------


class WashingStationListApi(APIView):
    """GET /washing-stations — list; POST /washing-stations — create."""

    authentication_classes = ()

    def get(self, request):
        try:
            stations = washing_station_list()
            data = WashingStationOutputSerializer(stations, many=True).data
        except Exception:
            logger.exception("Listing washing stations failed")
            return _internal_error()
        return Response(data, status=status.HTTP_200_OK)

    def post(self, request):
        body = request.data
        try:
            station = washing_station_create(data=body)
            data = WashingStationOutputSerializer(station).data
        except Exception:
            logger.exception("Creating washing station failed")
            return _internal_error()
        return Response(data, status=status.HTTP_201_CREATED)


class WashingStationDetailApi(APIView):
    """GET / PUT / DELETE /washing-stations/<id>."""

    authentication_classes = ()

    def get(self, request, station_id):
        try:
            station = washing_station_get(station_id=station_id)
            if station is None:
                return _not_found()
            data = WashingStationOutputSerializer(station).data
        except Exception:
            logger.exception("Fetching washing station %s failed", station_id)
            return _internal_error()
        return Response(data, status=status.HTTP_200_OK)

    def put(self, request, station_id):
        body = request.data
        try:
            station = washing_station_update(station_id=station_id, data=body)
            if station is None:
                return _not_found()
            data = WashingStationOutputSerializer(station).data
        except Exception:
            logger.exception("Updating washing station %s failed", station_id)
            return _internal_error()
        return Response(data, status=status.HTTP_200_OK)

    def delete(self, request, station_id):
        try:
            deleted = washing_station_delete(station_id=station_id)
        except Exception:
            logger.exception("Deleting washing station %s failed", station_id)
            return _internal_error()
        if not deleted:
            return _not_found()
        return Response({"message": WASHING_STATION_DELETED}, status=status.HTTP_200_OK)


# ---------------------------------------------------------------------------
# Maps (places provider)
# ---------------------------------------------------------------------------


class StationOutputSerializer(serializers.Serializer):
    name = serializers.CharField()
    location = serializers.DictField(child=serializers.FloatField(), allow_null=True)
    address = serializers.CharField(allow_blank=True)
    status = serializers.CharField(allow_blank=True)
    place_id = serializers.CharField()
    price = serializers.CharField(required=False)


class _NearbyStationsApi(APIView):
    """Shared GET handler; subclasses implement ``fetch``."""

    permission_classes = [IsAuthenticated]

    class InputSerializer(serializers.Serializer):
        latitude = serializers.FloatField(min_value=-90, max_value=90)
        longitude = serializers.FloatField(min_value=-180, max_value=180)
        radius = serializers.FloatField(min_value=1, max_value=PLACES_MAX_RADIUS_M)

    def get(self, request):
        input_ser = self.InputSerializer(data=request.query_params)
        input_ser.is_valid(raise_exception=True)

        try:
            stations = self.fetch(**input_ser.validated_data)
            data = StationOutputSerializer(stations, many=True).data
        except Exception:
            logger.exception("Nearby lookup failed for %s", request.path)
            return _internal_error()
        return Response(data, status=status.HTTP_200_OK)


class NearbyGasStationsApi(_NearbyStationsApi):
    """GET /maps/nearby-gas-stations?latitude&longitude&radius (metres)."""

    def fetch(self, **params):
        return nearby_gas_stations(**params)


class NearbyWashingStationsApi(_NearbyStationsApi):
    """GET /maps/nearby-washing-stations?latitude&longitude&radius (metres)."""

    def fetch(self, **params):
        return nearby_washing_stations(**params)


class StationDetailsApi(APIView):
    """GET /maps/station-details/<place_id>."""

    permission_classes = [IsAuthenticated]

    def get(self, request, place_id):
        try:
            station = station_details(place_id=place_id)
            if station is None:
                return Response(
                    {"error": "Station not found"}, status=status.HTTP_404_NOT_FOUND
                )
            data = StationOutputSerializer(station).data
        except Exception:
            logger.exception("Station details failed for %s", place_id)
            return _internal_error()
        return Response(data, status=status.HTTP_200_OK)
