# Jinja templates rendered with render_template_string.
# The viewer reads the toggles that the settings page stores in localStorage.

VIEW_HTML = '''<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta property="og:title" content="Random Cat!" />
  <meta property="og:description" content="Here’s a cat just for you 🐱" />
  <meta property="og:image" content="{{ image_url }}" />
  <meta property="twitter:card" content="summary_large_image" />
  <title>Random Cat</title>
  <style>
    body {
      font-family: system-ui, sans-serif;
      display: flex;
      justify-content: center;
      align-items: center;
      flex-direction: column;
      padding: 2rem;
      margin: 0;
    }
    body.dark { background-color: #121212; color: #ffffff; }
    body.light { background-color: #f7f7f7; color: #333; }
    .card {
      background: #1e1e1e;
      border-radius: 12px;
      box-shadow: 0 4px 20px rgba(0,0,0,0.6);
      padding: 1rem;
      max-width: 400px;
      text-align: center;
      border: 1px solid #333;
    }
    body.light .card { background: #ffffff; border-color: #ddd; box-shadow: 0 4px 20px rgba(0,0,0,0.1); }
    .card img { max-width: 100%; border-radius: 8px; }
    .button {
      margin-top: 1rem;
      background: #6366f1;
      color: white;
      padding: 0.6rem 1.2rem;
      border: none;
      border-radius: 6px;
      font-size: 1rem;
      cursor: pointer;
      box-shadow: 0 0 10px rgba(99, 102, 241, 0.4);
      transition: background 0.2s ease;
    }
    .button:hover { background: #4f46e5; }
    .settings-link { margin-top: 0.8rem; font-size: 0.85rem; color: #888; }
  </style>
</head>
<body class="dark">
  <div class="card">
    <h2>Random Cat 🐱</h2>
    <img src="{{ image_url }}" alt="A random cat" />
    <form method="GET" action="{{ new_url }}">
      <button class="button">New Cat</button>
    </form>
    <a class="settings-link" href="{{ settings_url }}">Settings</a>
  </div>

  <script src="https://cdn.jsdelivr.net/npm/canvas-confetti"></script>
  <script>
    const confettiEnabled = localStorage.getItem("confetti") === "true";
    const keyboardShortcutsEnabled = localStorage.getItem("keyboardShortcuts") === "true";
    // dark mode stays on until the user turns it off
    const darkModeEnabled = localStorage.getItem("darkMode") !== "false";

    document.body.classList.remove("dark", "light");
    document.body.classList.add(darkModeEnabled ? "dark" : "light");

    if (confettiEnabled) {
      document.addEventListener("DOMContentLoaded", function () {
        if (window.confetti) {
          window.confetti({ particleCount: 200, spread: 70, origin: { y: 0.6 } });
        }
      });
    }

    if (keyboardShortcutsEnabled) {
      document.addEventListener("keydown", function (e) {
        if (e.key === "n" || e.key === "N") {
          window.location.href = {{ new_url|tojson }};
        }
      });
    }
  </script>
</body>
</html>
'''

SETTINGS_HTML = '''<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>Cat Settings</title>
  <style>
    body {
      font-family: system-ui, sans-serif;
      background-color: #f7f7f7;
      color: #333;
      display: flex;
      justify-content: center;
      align-items: center;
      flex-direction: column;
      padding: 2rem;
      margin: 0;
    }
    .settings-container {
      background-color: #ffffff;
      border-radius: 12px;
      box-shadow: 0 4px 20px rgba(0,0,0,0.1);
      padding: 1.5rem;
      width: 300px;
      text-align: center;
    }
    .button {
      background-color: #6366f1;
      color: white;
      padding: 0.8rem 1.2rem;
      border: none;
      border-radius: 6px;
      cursor: pointer;
      margin-top: 1rem;
      font-size: 1rem;
    }
    .toggle { margin: 1rem 0; }
  </style>
</head>
<body>
  <div class="settings-container">
    <h2>Cat Settings</h2>
    <div class="toggle">
      <label for="confetti-toggle">Enable Confetti</label>
      <input type="checkbox" id="confetti-toggle" />
    </div>
    <div class="toggle">
      <label for="keyboard-toggle">Enable Keyboard Shortcuts</label>
      <input type="checkbox" id="keyboard-toggle" />
    </div>
    <div class="toggle">
      <label for="darkmode-toggle">Enable Dark Mode</label>
      <input type="checkbox" id="darkmode-toggle" checked />
    </div>
    <button class="button" onclick="saveSettings()">Save Settings</button>
    <p><a href="{{ home_url }}">&larr; Back to cats</a></p>
  </div>

  <script>
    document.getElementById("confetti-toggle").checked = localStorage.getItem("confetti") === "true";
    document.getElementById("keyboard-toggle").checked = localStorage.getItem("keyboardShortcuts") === "true";
    document.getElementById("darkmode-toggle").checked = localStorage.getItem("darkMode") !== "false";

    function saveSettings() {
      localStorage.setItem("confetti", document.getElementById("confetti-toggle").checked);
      localStorage.setItem("keyboardShortcuts", document.getElementById("keyboard-toggle").checked);
      localStorage.setItem("darkMode", document.getElementById("darkmode-toggle").checked);

      alert("Settings saved! Refreshing page...");
      window.location.reload();
    }
  </script>
</body>
</html>
'''
