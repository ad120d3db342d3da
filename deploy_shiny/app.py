from shiny import App, ui, render, reactive
import folium
import numpy as np
import branca.colormap as cm
import logging
import altair as alt  # Charting
from shinywidgets import output_widget, render_altair # Interactive Widgets

from vacancy_map import config, frames
from vacancy_map.errors import DataSourceError, InvalidTransition
from vacancy_map.geography import GeographyLevel
from vacancy_map.session import DrillDownSession
from vacancy_map.sources import CensusDataSource

# ==============================================================================
# CONFIGURATION
# ==============================================================================

logging.basicConfig(
    level=logging.INFO,
    format='[%(levelname)s] %(asctime)s - %(name)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger("deploy_shiny")

SOURCE = CensusDataSource()

LEVEL_CHOICES = {level.api_name: level.label for level in GeographyLevel}

# ==============================================================================
# DATA LOADING
# ==============================================================================

def load_state_choices():
    try:
        states = SOURCE.fetch_state_list()
    except DataSourceError as e:
        logger.error("Could not load state list: %s", e)
        return {}
    return {s['id']: s['name'] for s in states}

STATE_CHOICES = load_state_choices()

# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================

def bucket_colormap(rates, caption):
    # Fixed bucket bounds; the top step stretches to the highest observed rate
    top = float(np.ceil(np.nanmax(rates))) if len(rates) else 0.0
    vmax = max(top, config.BUCKET_BOUNDS[-1] + 5)
    s = cm.StepColormap(
        colors=list(config.PALETTE),
        index=list(config.BUCKET_BOUNDS) + [vmax],
        vmin=config.BUCKET_BOUNDS[0],
        vmax=vmax,
    )
    s.caption = caption
    return s

def build_map(result):
    m = folium.Map(location=config.DEFAULT_MAP_CENTER, zoom_start=config.DEFAULT_ZOOM, tiles="OpenStreetMap")
    if result is None or not result.regions:
        return m

    level = result.scope.level
    gdf = frames.regions_geoframe(result.boundaries, result.regions)
    gdf = gdf[~gdf.geometry.isna()]
    if gdf.empty:
        return m

    m.add_child(bucket_colormap(gdf['vacancy_rate_pct'].values, "Vacancy rate (%)"))

    folium.GeoJson(
        gdf,
        style_function=lambda feature: {
            'fillColor': feature['properties']['color'],
            'weight': 1,
            'opacity': 1,
            'color': 'white',
            'fillOpacity': 0.7
        },
        highlight_function=lambda feature: {
            'weight': 2,
            'color': '#666',
            'fillOpacity': 0.9
        },
        tooltip=folium.GeoJsonTooltip(
            fields=['name', 'vacancy_rate_pct'],
            aliases=[f"{level.label}:", 'Vacancy Rate (%):']
        )
    ).add_to(m)

    minx, miny, maxx, maxy = gdf.total_bounds
    m.fit_bounds([[miny, minx], [maxy, maxx]])
    return m

# ==============================================================================
# UI
# ==============================================================================

app_ui = ui.page_fluid(
    ui.div(
        ui.h3(f"Housing Vacancy Rates ({config.ACS_YEAR})", style="margin-top: 10px; margin-bottom: 0px; font-weight: bold;"),
    ),
    ui.markdown("""
    Share of housing units reported vacant in the ACS 5-year estimates (table B25002).
    Pick a state to load its counties, a county to drill in, then switch the geography level
    to see census tracts or block groups inside that county.
    """),
    ui.hr(),

    # --- 1. SELECTION ---
    ui.layout_columns(
        ui.input_select("state", "State", {**{"": "Select State"}, **STATE_CHOICES}),
        ui.input_select("county", "County", {"": "Select County"}),
        ui.input_select("geo_level", "Geography Level", LEVEL_CHOICES, selected="state"),
        col_widths=(4, 4, 4)
    ),
    ui.output_ui("error_message"),

    # --- 2. MAP ---
    ui.card(
        ui.output_ui("main_map_ui"),
    ),

    # --- 3. SUMMARY ---
    ui.hr(),
    ui.h3("Summary Statistics"),
    ui.layout_columns(
        ui.value_box(
            "Average Vacancy Rate",
            ui.output_text("val_avg_rate"),
            theme="primary"
        ),
        ui.value_box(
            "Total Vacant Units",
            ui.output_text("val_total_vacant"),
            theme="secondary"
        ),
        col_widths=(6, 6)
    ),

    # --- 4. HIGHEST RATES ---
    ui.hr(),
    ui.h3("Highest Vacancy Rates"),
    ui.layout_columns(
        ui.card(
            ui.output_data_frame("top_table"),
        ),
        ui.card(
            output_widget("chart_top"),
        ),
        col_widths=[5, 7]
    ),

    # --- 5. DATA TABLE ---
    ui.hr(),
    ui.h3("Complete Data Table"),
    ui.card(
        ui.output_data_frame("stat_table")
    ),

    # --- FOOTER ---
    ui.hr(),
    ui.div(
        ui.HTML("<p style='text-align:center'>Boundaries: Census TIGERweb &middot; Statistics: Census ACS 5-year API</p>"),
        style="padding-bottom: 20px;"
    )
)

# ==============================================================================
# SERVER
# ==============================================================================

def server(input, output, session):

    drill = DrillDownSession(SOURCE)

    # Last good result stays visible when a later fetch fails
    current = reactive.value(None)
    error = reactive.value(None)

    def load():
        scope = drill.scope()
        try:
            fetched = drill.fetch(scope)
        except DataSourceError as e:
            error.set(f"Failed to load {scope.level.label.lower()} data: {e}")
            return
        result = drill.apply(fetched)
        if result is not None:
            current.set(result)
            error.set(None)

    # --- Initial national view ---
    @reactive.effect
    def _():
        load()

    # --- State Selection ---
    @reactive.effect
    @reactive.event(input.state, ignore_init=True)
    def _():
        state_id = input.state()
        if not state_id:
            # back to the national view
            drill.reset()
            ui.update_select("county", choices={"": "Select County"}, selected="")
            ui.update_select("geo_level", selected=GeographyLevel.STATE.api_name)
            load()
            return
        drill.select_state(state_id)
        try:
            counties = SOURCE.fetch_county_list(state_id)
        except DataSourceError as e:
            error.set(f"Failed to load counties: {e}")
            counties = []
        ui.update_select("county", choices={**{"": "Select County"}, **{c['id']: c['name'] for c in counties}}, selected="")
        ui.update_select("geo_level", selected=GeographyLevel.STATE.api_name)
        load()

    # --- County Selection ---
    @reactive.effect
    @reactive.event(input.county, ignore_init=True)
    def _():
        county_id = input.county()
        if not county_id:
            return
        try:
            drill.select_county(county_id)
        except InvalidTransition as e:
            ui.notification_show(str(e), type="warning")
            return
        ui.update_select("geo_level", selected=GeographyLevel.COUNTY.api_name)
        load()

    # --- Level Selection ---
    @reactive.effect
    @reactive.event(input.geo_level, ignore_init=True)
    def _():
        level = GeographyLevel.from_api_name(input.geo_level())
        if level == drill.navigator.level:
            return
        try:
            drill.select_level(level)
        except InvalidTransition as e:
            ui.notification_show(str(e), type="warning")
            ui.update_select("geo_level", selected=drill.navigator.level.api_name)
            return
        load()

    # --- Error Banner ---
    @render.ui
    def error_message():
        msg = error()
        if not msg:
            return None
        return ui.div(msg, class_="alert alert-danger", role="alert")

    # --- Map Renderer ---
    @render.ui
    def main_map_ui():
        try:
            m = build_map(current())
            return ui.HTML(m._repr_html_())
        except Exception as e:
            logger.exception("Map rendering failed")
            return ui.HTML(f"<div style='color:red;'><h3>Map Error</h3>{e}</div>")

    # --- METRICS ---
    @render.text
    def val_avg_rate():
        res = current()
        if res is None: return "N/A"
        return f"{res.summary.avg_vacancy_rate_pct:.1f}%"

    @render.text
    def val_total_vacant():
        res = current()
        if res is None: return "N/A"
        return f"{res.summary.total_vacant_units:,}"

    # --- TOP N ---
    @render.data_frame
    def top_table():
        res = current()
        if res is None: return None
        return render.DataGrid(frames.top_table(res.summary, res.scope.level), selection_mode="none")

    @render_altair
    def chart_top():
        res = current()
        if res is None or not res.regions: return None

        top = res.summary.top(config.TOP_N)
        chart_data = [
            {'Region': r.name, 'Vacancy Rate': r.vacancy_rate_pct, 'Vacant Units': r.vacant_units, 'color': r.color}
            for r in top
        ]
        c = alt.Chart(alt.Data(values=chart_data)).mark_bar().encode(
            x=alt.X('Vacancy Rate:Q', title='Vacancy Rate (%)'),
            y=alt.Y('Region:N', sort=None, title=''),
            color=alt.Color('color:N', scale=None),
            tooltip=['Region:N', alt.Tooltip('Vacancy Rate:Q', format=".1f"), alt.Tooltip('Vacant Units:Q', format=",")]
        ).properties(
            title=f"Top {len(top)} by Vacancy Rate ({res.scope.level.label})",
            height=250
        )
        return c

    # --- DATA TABLE ---
    @render.data_frame
    def stat_table():
        res = current()
        if res is None: return None
        return render.DataGrid(frames.full_table(res.summary, res.scope.level), selection_mode="none")

app = App(app_ui, server)
