from django.urls import path

from stations.views import (
    NearbyGasStationsApi,
    NearbyWashingStationsApi,
    StationDetailsApi,
    WashingStationDetailApi,
    WashingStationListApi,
)

app_name = "stations"

urlpatterns = [
    path("washing-stations", WashingStationListApi.as_view(), name="washing-station-list"),
    path(
        "washing-stations/<str:station_id>",
        WashingStationDetailApi.as_view(),
        name="washing-station-detail",
    ),
    path("maps/nearby-gas-stations", NearbyGasStationsApi.as_view(), name="nearby-gas-stations"),
    path(
        "maps/nearby-washing-stations",
        NearbyWashingStationsApi.as_view(),
        name="nearby-washing-stations",
    ),
    path(
        "maps/station-details/<str:place_id>",
        StationDetailsApi.as_view(),
        name="station-details",
    ),
]
