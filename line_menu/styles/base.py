"""Central CSS definitions for the line-menu picker."""

# Picker layout - query on top, results fill the rest
PICKER_CSS = """
#picker {
    height: 100%;
    padding: 0 1;
    background: $surface;
}

#query {
    width: 100%;
    border: none;
    border-bottom: solid $surface-lighten-1;
    padding: 0 1;
}

#query:focus {
    border: none;
    border-bottom: solid $primary;
}
"""

# Result list rows
LIST_CSS = """
.list-container {
    height: 1fr;
    padding: 0;
    overflow-y: auto;
}

.list-row {
    height: 1;
    padding: 0 1;
}

.list-row:hover {
    background: $surface-lighten-1;
}

.list-row.selected {
    background: $primary-background;
    color: $text;
}

/* Empty list placeholder */
.empty-list {
    color: $text-disabled;
    padding: 2;
    text-align: center;
}
"""

# Combined base CSS for import
BASE_CSS = PICKER_CSS + LIST_CSS
